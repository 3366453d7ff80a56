"""
app.py
──────
Medical Device Risk Monitor — Application Entry Point.

Startup sequence:
  1. Configure logging
  2. Generate the simulated fleet and start the live stream
  3. Create Dash app with DARKLY bootstrap theme
  4. Register all callbacks
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.data.store import initialize_store
from src.data.streaming import initialize_stream
from src.layout.main import create_layout

# ── 1. Logging ────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")

# ── 2. Fleet + live stream ────────────────────────────────────────────────────
logger.info("Initializing medical device fleet...")
store = initialize_store()
stream = initialize_stream(store.run_tick)
logger.info("Fleet ready (%d devices, streaming=%s).", len(store.devices()), stream.is_running)

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Device Risk Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 4. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import alerts, device_detail, inventory, manual, navigation, streaming

navigation.register(app)
streaming.register(app)
inventory.register(app)
manual.register(app)
alerts.register(app)
device_detail.register(app)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
        use_reloader=False,  # the reloader would start a second stream thread
    )
