# alchemy/__init__.py
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

import click
from flask import Flask

from .db import db
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# --- extensions ---
migrate = Migrate()
# dev-friendly in-memory limiter; point RATELIMIT_STORAGE_URI at redis in prod
limiter = Limiter(get_remote_address, storage_uri="memory://")


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    *,
    store: Any = None,
    generator: Any = None,
) -> Flask:
    """
    Build the app. `store` / `generator` override what the config would pick,
    which is how tests get isolated, deterministic instances.
    """
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    app.config.from_object("config.Config")
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)
    if config:
        app.config.update(config)

    # ---------------------------
    # Logging
    # ---------------------------
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)
    logging.getLogger("alchemy").setLevel(level)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    from . import models  # noqa: F401  register tables on db.metadata

    # ---------------------------
    # Store / generator / resolver (chosen once, owned by the app)
    # ---------------------------
    from .core.store_registry import build_generator, build_store, install, warmup_store

    if store is None:
        store = build_store(app.config)
    if generator is None:
        generator = build_generator(app.config)
    if app.config.get("ALCHEMY_WARMUP", True):
        store = warmup_store(app, store)
    install(app, store, generator)

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .api.routes import bp as api_bp
    app.register_blueprint(api_bp)

    # ---------------------------
    # CLI commands
    # ---------------------------
    @app.cli.command("alchemy-init-db")
    def alchemy_init_db():
        """Create the elements/recipes tables."""
        db.create_all()
        click.echo("✅ Tables created.")

    @app.cli.command("alchemy-seed")
    def alchemy_seed():
        """Seed the four base elements (idempotent)."""
        from .core.store_registry import get_store
        added = get_store().seed_base_elements()
        click.echo(f"✅ Seeded {added} base element(s).")

    @app.cli.command("alchemy-stats")
    def alchemy_stats():
        """Print element/recipe counts."""
        from .core.store_registry import get_store
        s = get_store().stats()
        click.echo(
            f"store={s['store']} durable={s['durable']} elements={s['elements']} "
            f"base={s['base_elements']} recipes={s['recipes']}"
        )

    @app.cli.command("alchemy-hint")
    @click.argument("target", type=int)
    @click.option("-d", "--discovered", type=int, multiple=True, help="Already discovered element id.")
    @click.option("--from-discovered", is_flag=True, help="Start the search from the discovered set.")
    def alchemy_hint(target, discovered, from_discovered):
        """Print the shortest combination path to TARGET."""
        from .core.hints import shortest_path
        from .core.store_registry import get_store
        st = get_store()
        elements = st.list_elements()
        path = shortest_path(
            target, list(discovered), st.list_recipes(), st.base_element_ids(),
            elements=elements, start_from_discovered=from_discovered,
        )
        if path is None:
            click.echo(f"No known recipe chain reaches element {target}.")
            return
        if not path:
            click.echo(f"Element {target} is already discovered.")
            return
        for s in path:
            click.echo(f"{s.step}. {s.element_a.glyph} {s.element_a.name} + "
                       f"{s.element_b.glyph} {s.element_b.name} = {s.result.glyph} {s.result.name}")

    return app
