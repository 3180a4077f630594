"""FastAPI server with WebSocket for the life tracker."""

import asyncio
import json
import logging
import random
from typing import Callable, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field

from tracker.commands import CommandError, CommandType, parse_command
from tracker.config import MAX_PLAYERS, MIN_PLAYERS, MatchConfig
from tracker.orchestrator import MatchOrchestrator
from tracker.render import HELP_TEXT
from tracker.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections."""

    def __init__(self):
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: dict):
        """Broadcast message to all connected clients."""
        dead = []
        for connection in self.active_connections:
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning("Dropping WebSocket client after failed send", exc_info=True)
                dead.append(connection)
        for conn in dead:
            self.disconnect(conn)


class NewGameRequest(BaseModel):
    """Request body for a new match."""
    players: int = Field(default=MAX_PLAYERS, ge=MIN_PLAYERS, le=MAX_PLAYERS)
    commander: bool = True


class LifeRequest(BaseModel):
    player: int
    amount: int


class CommanderDamageRequest(BaseModel):
    target: int
    source: int
    amount: int


class CommandRequest(BaseModel):
    """A raw console line, e.g. ``"-2 5"`` or ``"cmd 1 3 4"``."""
    line: str


class RollRequest(BaseModel):
    sides: int = 20


def create_app(settings: Optional[Settings] = None,
               rng: Optional[random.Random] = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Life Tracker")
    manager = ConnectionManager()

    orchestrator = MatchOrchestrator(
        MatchConfig(players=settings.DEFAULT_PLAYERS, commander=settings.COMMANDER),
        capacity=settings.HISTORY_CAPACITY,
        rng=rng,
    )
    orchestrator.initialize()

    # One writer at a time: history is a total order
    lock = asyncio.Lock()

    def build_state_message() -> dict:
        """Build a state broadcast message with timeline position."""
        return {"type": "state", **orchestrator.to_dict()}

    async def mutate(change: Callable[[], dict]) -> dict:
        """Apply a state change under the match lock and broadcast it."""
        async with lock:
            result = change()
            if result["status"] == "ok":
                message = build_state_message()
                await manager.broadcast(message)
                result = {**result, "state": message["state"],
                          "can_undo": message["can_undo"], "can_redo": message["can_redo"]}
        return result

    # ==================== Match Creation ====================

    @app.post("/api/new-game")
    async def new_game(request: NewGameRequest):
        """Start a new match as an undoable history entry."""
        return await mutate(lambda: orchestrator.new_match(request.players, request.commander))

    @app.post("/api/reset")
    async def reset(request: NewGameRequest):
        """Start a new match and discard the whole history."""
        def do_reset() -> dict:
            orchestrator.reset(request.players, request.commander)
            return {"status": "ok"}
        return await mutate(do_reset)

    # ==================== Match Actions ====================

    @app.post("/api/life")
    async def change_life(request: LifeRequest):
        return await mutate(lambda: orchestrator.change_life(request.player, request.amount))

    @app.post("/api/set-life")
    async def set_life(request: LifeRequest):
        return await mutate(lambda: orchestrator.set_life(request.player, request.amount))

    @app.post("/api/poison")
    async def add_poison(request: LifeRequest):
        return await mutate(lambda: orchestrator.add_poison(request.player, request.amount))

    @app.post("/api/commander-damage")
    async def add_commander_damage(request: CommanderDamageRequest):
        return await mutate(lambda: orchestrator.add_commander_damage(
            request.target, request.source, request.amount))

    @app.post("/api/next-turn")
    async def next_turn():
        return await mutate(orchestrator.next_turn)

    @app.post("/api/command")
    async def run_command(request: CommandRequest):
        """Run one console command line."""
        try:
            command = parse_command(request.line)
        except CommandError as e:
            return {"status": "error", "message": str(e)}
        if command is None:
            return {"status": "error", "message": "Empty command"}
        if command.type == CommandType.QUIT:
            return {"status": "error", "message": "quit is only available in the console"}
        result = await mutate(lambda: orchestrator.execute(command))
        if result["status"] == "help":
            result["help"] = HELP_TEXT
        return {"state": orchestrator.current.to_dict(), **result}

    # ==================== History ====================

    @app.post("/api/undo")
    async def undo():
        return await mutate(orchestrator.undo)

    @app.post("/api/redo")
    async def redo():
        return await mutate(orchestrator.redo)

    @app.get("/api/history")
    async def get_history():
        """List reachable history entries, current one flagged."""
        return {
            "status": "ok",
            "history": orchestrator.get_history(),
            "cursor": orchestrator.timeline.cursor,
            "top": orchestrator.timeline.top,
        }

    # ==================== Dice ====================

    @app.post("/api/roll")
    async def roll(request: RollRequest):
        return orchestrator.roll(request.sides)

    @app.post("/api/coin")
    async def coin():
        return orchestrator.flip_coin()

    # ==================== State ====================

    @app.get("/api/state")
    async def get_state():
        """Get current match state."""
        return {"status": "ok", **orchestrator.to_dict()}

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": app.title}

    # ==================== WebSocket ====================

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await manager.connect(websocket)
        try:
            await websocket.send_json(build_state_message())

            while True:
                data = await websocket.receive_text()
                try:
                    cmd = json.loads(data)
                except json.JSONDecodeError:
                    continue
                if isinstance(cmd, dict) and cmd.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
        except WebSocketDisconnect:
            manager.disconnect(websocket)

    return app


app = create_app()


def main():
    import uvicorn
    logging.basicConfig(
        level=default_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    main()
