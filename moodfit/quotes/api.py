# -*- coding: utf-8 -*-
"""Daily quote endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_quote_service
from .service import DailyQuoteService, MotivationalQuote

router = APIRouter(prefix="/api/quotes", tags=["Quotes"])


@router.get("/daily", response_model=MotivationalQuote, summary="Today's motivational quote")
def daily_quote(service: DailyQuoteService = Depends(get_quote_service)):
    return service.daily_quote()
