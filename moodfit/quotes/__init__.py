from .service import CATEGORIES, FALLBACK_QUOTE, QUOTES, DailyQuoteService, MotivationalQuote

__all__ = ['CATEGORIES', 'FALLBACK_QUOTE', 'QUOTES', 'DailyQuoteService', 'MotivationalQuote']
