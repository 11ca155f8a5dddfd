import pytest

from cubeserver.commands import Command, CommandManager, SimpleCommand


class _Sender:
    name = "ConsoleSender"

    def __init__(self):
        self.messages = []

    def send_message(self, *message):
        self.messages.append("".join(str(m) for m in message))


class _Recording(Command):
    def __init__(self):
        self.loaded = 0

    @property
    def name(self):
        return "vers"

    def load(self):
        self.loaded += 1

    def kill(self):
        pass

    def evaluate(self, sender, params):
        sender.send_message("0.0.1-SNAPSHOT")

    def complete(self, sender, params):
        return ["vers"]


def test_register_and_search_ignores_case():
    manager = CommandManager()
    manager.register("stop", lambda sender, params: None)
    found = manager.search("STOP")
    assert found is not None and found.name == "stop"


def test_search_unknown_returns_none():
    manager = CommandManager()
    manager.register("send", lambda sender, params: None)
    assert manager.search("nothing") is None


def test_evaluate_passes_sender_and_params():
    manager = CommandManager()
    calls = []
    manager.register("send", lambda sender, params: calls.append((sender, params)))
    sender = _Sender()
    manager.search("send").evaluate(sender, ["a", "b"])
    assert calls == [(sender, ["a", "b"])]


def test_register_command_loads_it():
    manager = CommandManager()
    command = _Recording()
    manager.register_command(command)
    sender = _Sender()
    manager.search("Vers").evaluate(sender, [])
    assert command.loaded == 1
    assert sender.messages == ["0.0.1-SNAPSHOT"]


def test_simple_command_completes_nothing():
    command = SimpleCommand("vers", lambda sender, params: None)
    assert command.complete(_Sender(), ["v"]) == []


def test_kill_forgets_commands_and_refuses_new_ones():
    manager = CommandManager()
    manager.register("stop", lambda sender, params: None)
    manager.kill()
    assert manager.search("stop") is None
    with pytest.raises(RuntimeError):
        manager.register("stop", lambda sender, params: None)


def test_command_is_abstract():
    with pytest.raises(TypeError):
        Command()