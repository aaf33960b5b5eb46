import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Integer, Text, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.database import Base
from catalog_api.db_types import UUIDType
from catalog_api.models.navbar_category import NavbarCategory


class Category(Base):
    """
    Catalog category, owned by exactly one navbar category.
    Examples: Networking > Switches
    """
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    navbar_category_id: Mapped[uuid.UUID] = mapped_column(
        UUIDType(as_uuid=True),
        ForeignKey("navbar_categories.id"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # Display
    image: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    order: Mapped[int] = mapped_column("sort_order", Integer, default=0, nullable=False)

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    navbar_category: Mapped[NavbarCategory] = relationship(lazy="selectin")

    __table_args__ = (
        # Slugs are unique within one navbar category only
        UniqueConstraint("navbar_category_id", "slug", name="uq_categories_navbar_slug"),
        Index("ix_categories_navbar_order", "navbar_category_id", "sort_order"),
    )

    def __repr__(self) -> str:
        return f"<Category(name='{self.name}', slug='{self.slug}')>"
