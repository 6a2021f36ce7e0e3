import logging
import uuid
from typing import List

from fastapi import APIRouter, Request, WebSocket

from ..odds_feed import OddsFeed
from ..schemas.sportsbook import MatchOdds

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/odds", response_model=List[MatchOdds])
def list_odds(request: Request):
    """Cuotas de muestra del sportsbook"""
    return request.app.state.odds_feed.get_odds()


@router.websocket("/live")
async def live_odds(websocket: WebSocket):
    """Envía ``liveOdds`` cada intervalo hasta que el cliente se desconecta"""
    feed: OddsFeed = websocket.app.state.odds_feed
    await websocket.accept()

    listener_id = uuid.uuid4().hex
    logger.info("Socket conectado: %s", listener_id)

    async def emit(event: str, data: list) -> None:
        await websocket.send_json({"event": event, "data": data})

    feed.subscribe(listener_id, emit)
    try:
        # Los mensajes del cliente (texto o binarios) se ignoran; solo interesa el cierre
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
        logger.info("Socket desconectado: %s", listener_id)
    finally:
        feed.unsubscribe(listener_id)
