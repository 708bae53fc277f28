"""Tests for the interactive shell."""

from unittest.mock import patch

import pytest

from cyber_cms.shell import (
    display_menu,
    handle_command,
    main,
    parse_choice,
    run_menu,
)


def output(console) -> str:
    return console.file.getvalue()


@pytest.mark.parametrize("raw,expected", [("1", 1), (" 5 ", 5), ("0", None), ("6", None), ("abc", None), ("", None)])
def test_parse_choice(raw, expected):
    assert parse_choice(raw) == expected


def test_display_menu(console):
    display_menu(console)
    text = output(console)
    assert "=== Cyber Management System Menu ===" in text
    for line in ["1. Add User", "2. List Users", "3. Add Device", "4. List Devices", "5. Exit"]:
        assert line in text


def test_add_user_command(store, console):
    with patch("cyber_cms.shell.Prompt.ask", side_effect=["alice", "admin"]):
        should_exit = handle_command("1", store, console)

    assert should_exit is False
    assert store.list_users()[0].username == "alice"
    assert "User added successfully." in output(console)


def test_add_device_command(store, console):
    with patch("cyber_cms.shell.Prompt.ask", side_effect=["router1", "10.0.0.1", "active"]):
        handle_command("3", store, console)

    device = store.list_devices()[0]
    assert (device.id, device.name, device.ip, device.status) == (1, "router1", "10.0.0.1", "active")
    assert "Device added successfully." in output(console)


def test_list_empty_collections(store, console):
    handle_command("2", store, console)
    handle_command("4", store, console)
    text = output(console)
    assert "No users available." in text
    assert "No devices available." in text


def test_list_users_rows(store, console):
    store.add_user("alice", "admin")
    store.add_user("bob", "analyst")
    handle_command("2", store, console)

    text = output(console)
    assert "Users:" in text
    assert "ID: 1, Username: alice, Role: admin" in text
    assert "ID: 2, Username: bob, Role: analyst" in text
    assert "No users available." not in text


def test_list_shows_markup_literally(store, console):
    store.add_user("[bold]eve[/bold]", "admin")
    handle_command("2", store, console)
    assert "Username: [bold]eve[/bold]" in output(console)


def test_invalid_option(store, console):
    assert handle_command("9", store, console) is False
    assert handle_command("nope", store, console) is False
    assert output(console).count("Invalid option, try again.") == 2


def test_exit_option(store, console):
    assert handle_command("5", store, console) is True
    assert "Exiting system..." in output(console)


def test_comma_warning(store, console):
    with patch("cyber_cms.shell.Prompt.ask", side_effect=["smith, j", "admin"]):
        handle_command("1", store, console)
    assert "will not reload as entered" in output(console)


def test_run_menu_loops_until_exit(store, console):
    answers = ["7", "1", "alice", "admin", "2", "5"]
    with patch("cyber_cms.shell.Prompt.ask", side_effect=answers) as ask:
        run_menu(store, console)

    assert ask.call_count == len(answers)
    text = output(console)
    assert "Invalid option, try again." in text
    assert "ID: 1, Username: alice, Role: admin" in text
    assert text.count("=== Cyber Management System Menu ===") == 4


def test_run_menu_stops_on_end_of_input(store, console):
    with patch("cyber_cms.shell.Prompt.ask", side_effect=["3", "router1", EOFError()]):
        run_menu(store, console)

    assert store.list_devices() == []
    assert "Exiting system..." in output(console)


@pytest.fixture
def shell_env(monkeypatch, data_dir):
    monkeypatch.setenv("CMS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("CMS_USERS_FILE", "users.txt")
    monkeypatch.setenv("CMS_DEVICES_FILE", "devices.txt")
    monkeypatch.setenv("CMS_LOG_FILE", str(data_dir / "cms.log"))
    monkeypatch.setenv("CMS_LOG_LEVEL", "INFO")
    return data_dir


def test_main_end_to_end_across_restart(shell_env, capsys):
    first_session = [
        "1", "alice", "admin",
        "2",
        "3", "router1", "10.0.0.1", "active",
        "4",
        "5",
    ]
    with patch("cyber_cms.shell.Prompt.ask", side_effect=first_session):
        assert main() == 0

    text = capsys.readouterr().out
    assert text.count("ID: 1, Username: alice, Role: admin") == 1
    assert text.count("ID: 1, Name: router1, IP: 10.0.0.1, Status: active") == 1
    assert (shell_env / "users.txt").read_text() == "1,alice,admin\n"
    assert (shell_env / "devices.txt").read_text() == "1,router1,10.0.0.1,active\n"

    second_session = ["2", "1", "bob", "analyst", "5"]
    with patch("cyber_cms.shell.Prompt.ask", side_effect=second_session):
        assert main() == 0

    text = capsys.readouterr().out
    assert "ID: 1, Username: alice, Role: admin" in text
    assert (shell_env / "users.txt").read_text() == "1,alice,admin\n2,bob,analyst\n"


def test_main_saves_on_interrupt(shell_env):
    with patch("cyber_cms.shell.Prompt.ask", side_effect=["1", "alice", "admin", KeyboardInterrupt()]):
        with pytest.raises(KeyboardInterrupt):
            main()

    assert (shell_env / "users.txt").read_text() == "1,alice,admin\n"
    assert "Closing store after KeyboardInterrupt" in (shell_env / "cms.log").read_text()


def test_prompt_answers_are_stripped(store, console):
    """Surrounding whitespace typed at a field prompt is not stored."""
    with patch.object(console, "input", side_effect=["  alice  ", "\tadmin "]):
        handle_command("1", store, console)

    assert store.list_users()[0].username == "alice"
    assert store.list_users()[0].role == "admin"


def test_list_shows_undecodable_bytes_as_replacement(store, users_path, console):
    users_path.write_bytes(b"1,jos\xe9,admin\n")
    store.load()

    handle_command("2", store, console)

    assert "ID: 1, Username: jos�, Role: admin" in output(console)
