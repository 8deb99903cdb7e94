from merechat.presentation.websocket.controller import router as websocket_router

__all__ = ["websocket_router"]
