import pytest
import uvicorn

from order_total import main as main_module


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch):
    configs: list[uvicorn.Config] = []

    def run(self: uvicorn.Server) -> None:
        configs.append(self.config)
        self.started = True

    monkeypatch.setattr(uvicorn.Server, "run", run)
    return configs


def test_serves_on_configured_port(monkeypatch: pytest.MonkeyPatch, fake_run) -> None:
    monkeypatch.setenv("ORDER_TOTAL_PORT", "9100")

    assert main_module.main() == 0

    (config,) = fake_run
    assert config.port == 9100
    assert config.host == "0.0.0.0"


def test_default_port(monkeypatch: pytest.MonkeyPatch, fake_run) -> None:
    monkeypatch.delenv("ORDER_TOTAL_PORT", raising=False)

    main_module.main()

    assert fake_run[0].port == 8002


def test_invalid_configuration_exits_non_zero(monkeypatch: pytest.MonkeyPatch, fake_run) -> None:
    monkeypatch.setenv("ORDER_TOTAL_PORT", "not-a-port")

    assert main_module.main() == 2
    assert fake_run == []


def test_server_that_never_started_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(uvicorn.Server, "run", lambda self: None)

    assert main_module.main() == 1


def test_bind_error_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    def run(self: uvicorn.Server) -> None:
        raise OSError(98, "Address already in use")

    monkeypatch.setattr(uvicorn.Server, "run", run)

    assert main_module.main() == 1
