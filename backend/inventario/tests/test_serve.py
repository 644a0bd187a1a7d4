from inventario import serve


def test_run_options_defaults(monkeypatch):
    for name in ("HOST", "PORT", "RELOAD", "LOG_LEVEL", "SSL_CERTFILE", "SSL_KEYFILE"):
        monkeypatch.delenv(name, raising=False)

    options = serve.build_run_options()

    assert options["host"] == "0.0.0.0"
    assert options["port"] == 7000
    assert options["reload"] is False
    assert "ssl_certfile" not in options


def test_run_options_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9100")
    monkeypatch.setenv("RELOAD", "yes")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SSL_CERTFILE", "/etc/ssl/api.pem")
    monkeypatch.delenv("SSL_KEYFILE", raising=False)

    options = serve.build_run_options()

    assert options["port"] == 9100
    assert options["reload"] is True
    assert options["log_level"] == "debug"
    # TLS needs both files.
    assert "ssl_certfile" not in options

    monkeypatch.setenv("SSL_KEYFILE", "/etc/ssl/api.key")
    options = serve.build_run_options()
    assert options["ssl_certfile"] == "/etc/ssl/api.pem"
    assert options["ssl_keyfile"] == "/etc/ssl/api.key"
