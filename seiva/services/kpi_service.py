"""KPI Service - dashboard aggregates and transaction/roster filters"""

from datetime import date
from typing import Iterable, List, Optional, Sequence

from seiva.models.enums import Department, FinancialStatus, TransactionStatus, TransactionType
from seiva.schemas.employee import Employee
from seiva.schemas.kpi import KPIData
from seiva.schemas.student import Student
from seiva.schemas.transaction import Transaction, TransactionSummary
from seiva.services.status_classifier import StatusPolicy


def _completed_total(transactions: Iterable[Transaction], tx_type: TransactionType) -> float:
    return sum(
        t.amount
        for t in transactions
        if t.type == tx_type and t.status == TransactionStatus.COMPLETED
    )


def compute_kpis(
    students: Sequence[Student],
    transactions: Sequence[Transaction],
    policy: StatusPolicy,
) -> KPIData:
    """
    Derive the dashboard KPIs from one snapshot of students and transactions.

    Lateness is re-classified from ``paid_months`` rather than read from the
    cached ``financial_status``, so a stale record cannot skew the rate.
    """
    total_students = len(students)
    revenue = _completed_total(transactions, TransactionType.INCOME)
    expenses = _completed_total(transactions, TransactionType.EXPENSE)
    late = sum(1 for s in students if policy.classify(s.paid_months) == FinancialStatus.LATE)
    delinquency_rate = (late / total_students) * 100 if total_students > 0 else 0.0

    return KPIData(
        total_students=total_students,
        total_revenue=revenue,
        total_expenses=expenses,
        net_balance=revenue - expenses,
        delinquency_rate=round(delinquency_rate, 1),
    )


def summarize_transactions(transactions: Sequence[Transaction]) -> TransactionSummary:
    """Revenue, expenses and net over completed entries, plus the amount still pending."""
    revenue = _completed_total(transactions, TransactionType.INCOME)
    expenses = _completed_total(transactions, TransactionType.EXPENSE)
    pending = sum(t.amount for t in transactions if t.status == TransactionStatus.PENDING)
    return TransactionSummary(revenue=revenue, expenses=expenses, net=revenue - expenses, pending=pending)


def filter_transactions(
    transactions: Sequence[Transaction],
    search: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Transaction]:
    """
    Filter by a case-insensitive search over description and category and by
    an inclusive date range. Missing bounds are open.
    """
    term = (search or "").strip().lower()
    out = []
    for tx in transactions:
        if term and term not in tx.description.lower() and term not in tx.category.lower():
            continue
        if date_from and tx.date < date_from:
            continue
        if date_to and tx.date > date_to:
            continue
        out.append(tx)
    return out


def search_students(students: Sequence[Student], term: Optional[str]) -> List[Student]:
    """Match name, enrollment ID or grade, case-insensitively."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(students)
    return [
        s for s in students
        if needle in s.name.lower()
        or needle in s.enrollment_id.lower()
        or needle in s.grade.lower()
    ]


def new_enrollments_in_month(students: Sequence[Student], on: date) -> int:
    """Students whose ``academic.enrollmentDate`` falls in the month of ``on``."""
    count = 0
    for s in students:
        raw = s.academic.get("enrollmentDate")
        if not raw:
            continue
        try:
            enrolled = date.fromisoformat(str(raw)[:10])
        except ValueError:
            continue
        if (enrolled.year, enrolled.month) == (on.year, on.month):
            count += 1
    return count


def filter_employees(employees: Sequence[Employee], department: Optional[Department]) -> List[Employee]:
    if department is None:
        return list(employees)
    return [e for e in employees if e.department == department]


def tuition_description(student_name: str, months: Sequence[str]) -> str:
    """Default description for a tuition payment."""
    if months:
        formatted = ", ".join(m[:1].upper() + m[1:] for m in months)
        return f"Mensalidade: {formatted} - Aluno: {student_name}"
    return f"Mensalidade Ref. ao aluno: {student_name}"
