import uuid
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Text, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.database import Base
from catalog_api.db_types import UUIDType, JSONType
from catalog_api.models.navbar_category import NavbarCategory
from catalog_api.models.category import Category
from catalog_api.models.subcategory import SubCategory


class Product(Base):
    """
    Catalog product.

    Belongs to one category and optionally to one of that category's
    subcategories. navbar_category_id is a denormalised copy of
    category.navbar_category_id and is only ever written by ProductService
    and CategoryService.
    """
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(220), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    key_features: Mapped[List[str]] = mapped_column(JSONType, default=list, nullable=False)

    # Images (image1 is mandatory)
    image1: Mapped[str] = mapped_column(String(500), nullable=False)
    image2: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    image3: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    image4: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    # Hierarchy
    navbar_category_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(as_uuid=True),
        ForeignKey("navbar_categories.id"),
        nullable=False,
        index=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(as_uuid=True),
        ForeignKey("categories.id"),
        nullable=False,
        index=True
    )
    subcategory_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUIDType(as_uuid=True),
        ForeignKey("subcategories.id"),
        nullable=True,
        index=True
    )
    # subcategory_id when set, else category_id
    slug_scope_id: Mapped[uuid.UUID] = mapped_column(UUIDType(as_uuid=True), nullable=False)

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    navbar_category: Mapped[NavbarCategory] = relationship(lazy="selectin")
    category: Mapped[Category] = relationship(lazy="selectin")
    subcategory: Mapped[Optional[SubCategory]] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("slug_scope_id", "slug", name="uq_products_scope_slug"),
        Index("ix_products_hierarchy", "navbar_category_id", "category_id", "subcategory_id"),
    )

    @property
    def images(self) -> List[str]:
        """Non-empty image URLs in display order."""
        return [img for img in (self.image1, self.image2, self.image3, self.image4) if img]

    def __repr__(self) -> str:
        return f"<Product(name='{self.name}', slug='{self.slug}')>"
