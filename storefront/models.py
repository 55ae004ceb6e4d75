from sqlalchemy import CheckConstraint, Column, Index, Numeric, String, Text

from .database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)         # exact money
    description = Column(Text, nullable=True)
    image = Column(String(512), nullable=True)
    category = Column(String(100), nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
        Index("ix_products_category_name", "category", "name"),
    )
