from alchemy import create_app

from fakes import FIRE, STEAM_ANSWERS, WATER, StubGenerator, memory_config, sql_config


class TestCommands:
    def test_stats(self, app):
        out = app.test_cli_runner().invoke(args=["alchemy-stats"]).output
        assert "store=memory" in out
        assert "elements=4" in out
        assert "recipes=0" in out

    def test_seed_is_idempotent(self, app):
        out = app.test_cli_runner().invoke(args=["alchemy-seed"]).output
        assert "Seeded 0" in out

    def test_init_db_and_seed_without_warmup(self, tmp_path):
        app = create_app(sql_config(tmp_path / "cli.db", ALCHEMY_WARMUP=False),
                         generator=StubGenerator(STEAM_ANSWERS))
        runner = app.test_cli_runner()
        assert "Tables created" in runner.invoke(args=["alchemy-init-db"]).output
        assert "Seeded 4" in runner.invoke(args=["alchemy-seed"]).output
        assert "store=sql" in runner.invoke(args=["alchemy-stats"]).output

    def test_hint(self, app, client):
        client.post("/alchemy/api/combine", json={"elementAId": WATER, "elementBId": FIRE})
        runner = app.test_cli_runner()
        out = runner.invoke(args=["alchemy-hint", "5"]).output
        assert "1. 💧 Water + 🔥 Fire = ♨️ Steam" in out
        assert "already discovered" in runner.invoke(args=["alchemy-hint", "5", "-d", "5"]).output
        assert "No known recipe chain" in runner.invoke(args=["alchemy-hint", "42"]).output

    def test_table_generator_from_config(self):
        app = create_app(memory_config(ELEMENT_GENERATOR="table"))
        data = app.test_client().post(
            "/alchemy/api/combine", json={"elementAId": WATER, "elementBId": FIRE},
        ).get_json()
        assert data["result"]["name"] == "Steam"
