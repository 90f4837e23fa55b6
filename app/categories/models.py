from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    color = Column(String(20), nullable=True)  # hex, e.g. #ef4444
    icon = Column(String(20), nullable=True)  # short string or emoji

    # NULL owner = default category shared by everyone
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="categories")
    expenses = relationship(
        "Expense",
        back_populates="category",
        passive_deletes=True,
    )

    @property
    def is_default(self) -> bool:
        return self.user_id is None
