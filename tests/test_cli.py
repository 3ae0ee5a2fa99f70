"""Tests for the command line helpers."""

import pytest

from authgate.cli import main
from authgate.config.auth_config import AuthConfiguration
from authgate.services.password_hasher import verify_password


def _configuration(**environ) -> AuthConfiguration:
    return AuthConfiguration(env_files=(), environ=environ)


def test_hash_password_prints_a_verifiable_hash(capsys) -> None:
    exit_code = main(
        ["hash-password", "--password", "member123"],
        configuration=_configuration(AUTH_PASSWORD_ITERATIONS="1000"),
    )

    output = capsys.readouterr().out.strip()
    assert exit_code == 0
    assert output.startswith("pbkdf2_sha256$1000$")
    assert verify_password("member123", output)


def test_explicit_iterations_override_configuration(capsys) -> None:
    main(
        ["hash-password", "--password", "member123", "--iterations", "1500"],
        configuration=_configuration(AUTH_PASSWORD_ITERATIONS="1000"),
    )

    assert capsys.readouterr().out.startswith("pbkdf2_sha256$1500$")


def test_blank_password_is_refused(capsys) -> None:
    assert main(["hash-password", "--password", ""], configuration=_configuration()) == 1


def test_show_config_reports_settings(capsys) -> None:
    exit_code = main(["show-config"], configuration=_configuration(AUTH_LOGIN_WITH_EMAIL="1"))

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "login mode: email" in output
    assert "connection string: missing" in output
    assert "password iterations: 480000" in output


@pytest.mark.parametrize("iterations", ["0", "-5", "many"])
def test_non_positive_iterations_are_rejected_by_the_parser(capsys, iterations) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["hash-password", "--password", "member123", "--iterations", iterations], configuration=_configuration())

    assert excinfo.value.code == 2
    assert capsys.readouterr().out == ""
