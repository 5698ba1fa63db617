"""Service for the label vocabularies: asset categories, crypto sectors, custodies."""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from models import Asset, AssetCategory, CryptoAsset, CryptoSector, Custody

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_NAMES = [
    "Renda Fixa",
    "Renda Variável BR",
    "Renda Variável EUA",
    "Caixa",
]

DEFAULT_SECTOR_NAMES = [
    "Store of Value",
    "Smart Contracts",
    "Stablecoins",
    "DeFi",
    "Outros",
]

DEFAULT_CUSTODY_NAMES = [
    "Binance",
    "Carteira Local",
    "Ledger",
]


class LabelService:
    """CRUD for one open label vocabulary.

    A user sees their own labels plus the shared defaults (``user_id`` NULL).
    Names are unique case-insensitively within that visible set. A label
    cannot be removed while any holding still references it.
    """

    def __init__(self, model, holding_model, reference_column: str, noun: str, default_names: list[str]):
        self.model = model
        self.holding_model = holding_model
        self.reference_column = reference_column
        self.noun = noun
        self.default_names = default_names

    def _visible(self, db: Session, user_id: str):
        return db.query(self.model).filter(
            or_(self.model.user_id == user_id, self.model.user_id.is_(None))
        )

    def list_for_user(self, db: Session, user_id: str) -> list:
        """User's labels and the shared defaults, ordered by name."""
        return self._visible(db, user_id).order_by(self.model.name).all()

    def get_visible(self, db: Session, user_id: str, label_id: str):
        """Get a label the user can attach to a holding, or raise 404."""
        label = self._visible(db, user_id).filter(self.model.id == label_id).first()
        if not label:
            raise HTTPException(status_code=404, detail=f"{self.noun} not found")
        return label

    def _clean_name(self, name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail=f"{self.noun} name cannot be empty")
        return cleaned

    def _ensure_unique(self, db: Session, user_id: str, name: str, exclude_id: Optional[str] = None) -> None:
        # SQLite lower() only folds ASCII, so accented names are compared here.
        key = name.casefold()
        for label in self._visible(db, user_id).all():
            if label.id != exclude_id and label.name.casefold() == key:
                raise HTTPException(status_code=400, detail=f"{self.noun} '{name}' already exists")

    def create(self, db: Session, user_id: str, name: str):
        """
        Create a label owned by ``user_id``.

        Raises:
            HTTPException: 400 if the name is blank or already visible to the user
        """
        cleaned = self._clean_name(name)
        self._ensure_unique(db, user_id, cleaned)

        label = self.model(user_id=user_id, name=cleaned, is_default=False)
        db.add(label)
        db.commit()
        db.refresh(label)
        logger.info("%s created: %s (id=%s)", self.noun, cleaned, label.id)
        return label

    def _get_owned(self, db: Session, user_id: str, label_id: str):
        label = self.get_visible(db, user_id, label_id)
        if label.user_id is None:
            raise HTTPException(
                status_code=400, detail=f"Default {self.noun.lower()} cannot be modified"
            )
        return label

    def rename(self, db: Session, user_id: str, label_id: str, name: str):
        """
        Rename one of the user's labels.

        Raises:
            HTTPException: 404 if unknown, 400 for defaults, blank or duplicate names
        """
        label = self._get_owned(db, user_id, label_id)
        cleaned = self._clean_name(name)
        self._ensure_unique(db, user_id, cleaned, exclude_id=label.id)

        label.name = cleaned
        db.commit()
        db.refresh(label)
        logger.info("%s renamed: %s (id=%s)", self.noun, cleaned, label.id)
        return label

    def reference_count(self, db: Session, label_id: str) -> int:
        """Number of holdings pointing at the label."""
        column = getattr(self.holding_model, self.reference_column)
        return db.query(self.holding_model).filter(column == label_id).count()

    def delete(self, db: Session, user_id: str, label_id: str) -> None:
        """
        Delete one of the user's labels if nothing references it.

        Raises:
            HTTPException: 404 if unknown, 400 for defaults, 409 while referenced
        """
        label = self._get_owned(db, user_id, label_id)

        count = self.reference_count(db, label.id)
        if count > 0:
            raise HTTPException(
                status_code=409,
                detail=f"Cannot delete: {count} holdings use this {self.noun.lower()}",
            )

        db.delete(label)
        db.commit()
        logger.info("%s deleted: %s (id=%s)", self.noun, label.name, label_id)

    def seed_defaults(self, db: Session) -> None:
        """Seed the shared default labels on a fresh database.

        If any shared default already exists, this is a no-op.
        """
        existing_count = db.query(self.model).filter(self.model.user_id.is_(None)).count()
        if existing_count > 0:
            logger.info("Default %s labels already exist, skipping seed", self.noun.lower())
            return

        for name in self.default_names:
            db.add(self.model(user_id=None, name=name, is_default=True))

        db.commit()
        logger.info("Seeded %d default %s labels", len(self.default_names), self.noun.lower())


category_labels = LabelService(AssetCategory, Asset, "category_id", "Category", DEFAULT_CATEGORY_NAMES)
sector_labels = LabelService(CryptoSector, CryptoAsset, "sector_id", "Sector", DEFAULT_SECTOR_NAMES)
custody_labels = LabelService(Custody, CryptoAsset, "custody_id", "Custody", DEFAULT_CUSTODY_NAMES)

ALL_LABEL_SERVICES = (category_labels, sector_labels, custody_labels)


def seed_default_labels(db: Session) -> None:
    """Seed every vocabulary's shared defaults."""
    for service in ALL_LABEL_SERVICES:
        service.seed_defaults(db)
