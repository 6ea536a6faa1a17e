"""Transaction Table"""

from sqlalchemy import Column, Date, Float, String, Text
from sqlalchemy.dialects.postgresql import ARRAY

from seiva.models.base import BaseModel, value_enum
from seiva.models.enums import TransactionStatus, TransactionType


class TransactionRow(BaseModel):
    """
    Income/expense ledger entry.
    ``student_id`` is a weak reference: no foreign key, no cascade.
    """
    __tablename__ = "transactions"

    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    amount = Column(Float, nullable=False)
    type = Column(value_enum(TransactionType, "transaction_type"), nullable=False, index=True)
    category = Column(String(128), nullable=False, default="")
    method = Column(String(64), nullable=False, default="")
    status = Column(
        value_enum(TransactionStatus, "transaction_status"),
        nullable=False,
        default=TransactionStatus.COMPLETED,
        index=True,
    )
    attachment = Column(Text, nullable=True)
    student_id = Column(String(64), nullable=True, index=True)
    paid_months = Column(ARRAY(String), nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<TransactionRow {self.type} {self.amount} - {self.status}>"
