"""Crypto holdings API endpoints."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from api.helpers import get_current_user_id
from database import get_db
from schemas import CryptoCreate, CryptoResponse, CryptoUpdate, PriceRefreshResponse
from services.crypto_service import CryptoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/crypto", tags=["crypto"])


class ConversionRateResponse(BaseModel):
    """USD to BRL rate used for crypto BRL totals."""

    usd_brl: Decimal


def get_crypto_service() -> CryptoService:
    """Dependency for the crypto service (overridable in tests)."""
    return CryptoService()


@router.get("", response_model=list[CryptoResponse])
def list_cryptos(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return CryptoService.list_cryptos(db, user_id)


@router.get("/conversion-rate", response_model=ConversionRateResponse)
def get_conversion_rate(service: CryptoService = Depends(get_crypto_service)):
    """Current USD to BRL rate, or the configured fallback."""
    return ConversionRateResponse(usd_brl=service.resolve_conversion_rate())


@router.post("/refresh-prices", response_model=PriceRefreshResponse)
def refresh_prices(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: CryptoService = Depends(get_crypto_service),
):
    """Update every crypto holding from current market quotes."""
    result = service.refresh_prices(db, user_id)
    return PriceRefreshResponse(
        updated=result.updated,
        missing=result.missing,
        conversion_rate=result.conversion_rate,
    )


@router.post("", response_model=CryptoResponse, status_code=201)
def create_crypto(
    data: CryptoCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: CryptoService = Depends(get_crypto_service),
):
    """Create a crypto holding; BRL total uses the current rate."""
    rate = service.resolve_conversion_rate()
    return service.create_crypto(db, user_id, data, rate)


@router.get("/{crypto_id}", response_model=CryptoResponse)
def get_crypto(
    crypto_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return CryptoService.get_crypto(db, user_id, crypto_id)


@router.patch("/{crypto_id}", response_model=CryptoResponse)
def update_crypto(
    crypto_id: str,
    data: CryptoUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: CryptoService = Depends(get_crypto_service),
):
    rate = service.resolve_conversion_rate()
    return service.update_crypto(db, user_id, crypto_id, data, rate)


@router.delete("/{crypto_id}", status_code=204)
def delete_crypto(
    crypto_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    CryptoService.delete_crypto(db, user_id, crypto_id)
    return Response(status_code=204)
