from portfolio_ai.chat.session import ChatOutcome, ConversationSession

__all__ = ["ChatOutcome", "ConversationSession"]
