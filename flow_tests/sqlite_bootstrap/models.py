"""
Sample shop model used by the SQLite bootstrap flow
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Customer(Base):
    __tablename__ = "Customer"

    Id = Column(Integer, primary_key=True)
    Email = Column(String(1000))
    CreatedOnUtc = Column(DateTime, nullable=False)


class Discount(Base):
    __tablename__ = "Discount"

    Id = Column(Integer, primary_key=True)
    Name = Column(String(200), nullable=False)
    DiscountPercentage = Column(Numeric(18, 4), nullable=False, default=0)


class Product(Base):
    __tablename__ = "Product"

    Id = Column(Integer, primary_key=True)
    Name = Column(String(400), nullable=False)
    Sku = Column(String(400))
    Price = Column(Numeric(18, 4), nullable=False)
    Published = Column(Integer, nullable=False, default=1)


class Order(Base):
    __tablename__ = "Order"

    Id = Column(Integer, primary_key=True)
    CustomerId = Column(Integer, ForeignKey("Customer.Id"), nullable=False)
    OrderTotal = Column(Numeric(18, 4), nullable=False)
    CreatedOnUtc = Column(DateTime, nullable=False)


class ShoppingCartItem(Base):
    __tablename__ = "ShoppingCartItem"

    Id = Column(Integer, primary_key=True)
    CustomerId = Column(Integer, ForeignKey("Customer.Id"), nullable=False)
    ProductId = Column(Integer, ForeignKey("Product.Id"), nullable=False)
    Quantity = Column(Integer, nullable=False)
