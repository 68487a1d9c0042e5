"""FastAPI application for the Cook Mode service."""
from fastapi import Depends, FastAPI, WebSocket, WebSocketDisconnect

from .. import __version__
from .routes import get_runner, router
from .runner import CookModeRunner, cook_mode_runner
from .websocket import manager

# Create FastAPI app
app = FastAPI(
    title="Cook Mode",
    description="Keep the screen awake while cooking",
    version=__version__,
)

# Include API routes
app.include_router(router)


@app.get("/")
async def root():
    return {"message": "Cook Mode API", "docs": "/docs"}


@app.websocket("/ws/cook-mode")
async def websocket_endpoint(websocket: WebSocket, runner: CookModeRunner = Depends(get_runner)):
    """WebSocket endpoint for status and toggle updates."""
    await manager.connect(websocket)

    # Send current status on connect
    await websocket.send_json({
        "type": "connected",
        "status": runner.get_status(),
    })

    try:
        while True:
            data = await websocket.receive_text()

            # Handle ping/pong for keepalive
            if data == "ping":
                await websocket.send_text("pong")
            elif data == "status":
                await websocket.send_json({
                    "type": "status",
                    **runner.sink.to_dict(),
                })

    except WebSocketDisconnect:
        manager.disconnect(websocket)


@app.on_event("startup")
async def startup_event():
    """Probe wake lock support on startup."""
    supported = cook_mode_runner.startup()
    print("Cook Mode service starting...")
    print(f"Wake lock supported: {supported}")


@app.on_event("shutdown")
async def shutdown_event():
    """Release any held wake lock on shutdown."""
    cook_mode_runner.unload()
    print("Cook Mode service shutting down...")
