# app/models/transaction.py
import uuid
from sqlalchemy import Column, Text, Float, DateTime, Uuid
from app.core.database import Base

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    amount = Column(Float, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="uncategorized")
    type = Column(Text, nullable=False)  # 'income' or 'expense'
    # Kept as submitted: a plain date from the form or a full ISO timestamp
    date = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Transaction amount={self.amount} type={self.type} date={self.date}>"
