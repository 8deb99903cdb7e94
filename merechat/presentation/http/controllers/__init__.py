from merechat.presentation.http.controllers.chat import router as chat_router
from merechat.presentation.http.controllers.messages import router as messages_router

__all__ = ["chat_router", "messages_router"]
