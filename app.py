"""
app.py
──────
Aqua Monitor: water source tracking dashboard entry point.

Startup sequence:
  1. Seed the repository with the sample water sources
  2. Build the management system (one monitor per source, alert log)
  3. Create Dash app with DARKLY bootstrap theme and register callbacks
  4. Run dev server (or expose `server` for gunicorn in production)

The tick simulation is started from the navbar, not at import time.
"""
import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.data.store import WaterSourceRepository
from src.layout.main import create_layout
from src.services.water_system import WaterManagementSystem
from src.utils.logger import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

# ── 1–2. Repository and system ────────────────────────────────────────────────
repository = WaterSourceRepository()
seeded = repository.seed_sample_sources()
logger.info("Seeded %d water sources", seeded)

system = WaterManagementSystem(repository=repository)

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Aqua Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

from src.callbacks import alerts, allocation, navigation  # noqa: E402

navigation.register(app, system)
allocation.register(app, system)
alerts.register(app, system)

# ── 4. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
