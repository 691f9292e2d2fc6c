"""Kerala lottery result extraction and ticket checking package."""

from .models import DrawLink, LotteryResult, ResultSnapshot, TicketMatch

__all__ = ["LotteryResult", "ResultSnapshot", "DrawLink", "TicketMatch"]
