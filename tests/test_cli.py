"""CLI tests for the roster, battle and simulate commands."""

from pokearena.cli.app import app


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "PokeArena v0.1.0" in result.output


def test_roster_lists_species(cli_runner):
    result = cli_runner.invoke(app, ["roster"])
    assert result.exit_code == 0
    assert "Pikachu" in result.output
    assert "Snorlax" in result.output


def test_simulate_reaches_a_winner(cli_runner, isolated_config):
    result = cli_runner.invoke(app, ["simulate", "--seed", "7", "--team", "pikachu", "--cpu-team", "snorlax"])
    assert result.exit_code == 0
    assert "Winner: " in result.output
    assert "Go! Pikachu!" in result.output
    assert "CPU sent out Snorlax!" in result.output


def test_simulate_is_reproducible(cli_runner, isolated_config):
    args = ["simulate", "--seed", "11", "--size", "2"]
    first = cli_runner.invoke(app, args)
    second = cli_runner.invoke(app, args)
    assert first.exit_code == 0
    assert first.output == second.output


def test_simulate_stops_at_max_turns(cli_runner, isolated_config):
    result = cli_runner.invoke(
        app, ["simulate", "--seed", "1", "--team", "snorlax", "--cpu-team", "lapras", "--max-turns", "1"]
    )
    assert result.exit_code == 0
    assert "Stopped after 1 actions with no winner." in result.output


def test_unknown_species_exits(cli_runner, isolated_config):
    result = cli_runner.invoke(app, ["simulate", "--team", "missingno"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_team_too_large_rejected(cli_runner, isolated_config):
    result = cli_runner.invoke(app, ["simulate", "--size", "9"])
    assert result.exit_code != 0


def test_battle_run_away(cli_runner, isolated_config):
    # Pikachu (base speed 90) always outruns Snorlax (30)
    result = cli_runner.invoke(
        app,
        ["battle", "--team", "pikachu", "--cpu-team", "snorlax", "--seed", "3", "--delay", "0"],
        input="4\nn\n",
    )
    assert result.exit_code == 0
    assert "Got away safely!" in result.output


def test_online_falls_back_to_builtin_data(cli_runner, isolated_config, monkeypatch):
    monkeypatch.setattr("pokearena.data.pokeapi.create_battle_pokemon_sync", lambda *a, **kw: None)
    result = cli_runner.invoke(
        app, ["simulate", "--online", "--seed", "2", "--team", "pikachu", "--cpu-team", "gengar"]
    )
    assert result.exit_code == 0
    assert "Could not fetch pikachu" in result.output
    assert "Winner: " in result.output
