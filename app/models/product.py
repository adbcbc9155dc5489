"""ORM model for catalog products."""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, func

from app.models.base import Base


class Product(Base):
    """
    A catalog product, created and maintained by admins.

    user_id records the creating user; it is not a cascading foreign key.
    image_data is an opaque client-encoded blob (e.g. a base64 data URL) stored
    in the imageData column.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    image_data = Column("imageData", Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
