"""Tests for the create useridentitymapping command logic."""

import io
from unittest.mock import MagicMock

import pytest

from core.domain.models import Status, UserIdentityMapping
from core.errors import APIStatusError, ConfigurationError, UsageError
from core.services.create_mapping import CreateUserIdentityMappingOptions

IDENTITY = "acme_ldap:adamjones"
USER = "ajones"


def _completed(fake_client: MagicMock, *, dry_run: bool = False, output: str = "") -> tuple[CreateUserIdentityMappingOptions, io.StringIO]:
    out = io.StringIO()
    options = CreateUserIdentityMappingOptions(out=out)
    options.complete([IDENTITY, USER], dry_run=dry_run, output_format=output, client_factory=lambda: fake_client)
    options.validate()
    return options, out


class TestComplete:
    @pytest.mark.parametrize(
        ("args", "message"),
        [
            ([], "identity is required"),
            ([IDENTITY], "user name is required"),
        ],
    )
    def test_missing_arguments(self, fake_client, args, message):
        factory = MagicMock(return_value=fake_client)
        options = CreateUserIdentityMappingOptions(out=io.StringIO())

        with pytest.raises(UsageError, match=message):
            options.complete(args, dry_run=False, output_format="", client_factory=factory)

        factory.assert_not_called()
        fake_client.create.assert_not_called()

    def test_too_many_arguments_names_all_of_them(self, fake_client):
        factory = MagicMock(return_value=fake_client)
        options = CreateUserIdentityMappingOptions(out=io.StringIO())

        with pytest.raises(UsageError) as exc_info:
            options.complete([IDENTITY, USER, "extra"], dry_run=False, output_format="", client_factory=factory)

        assert str(exc_info.value) == (
            "exactly two arguments (identity and user name) are supported, "
            f"not: [{IDENTITY} {USER} extra]"
        )
        factory.assert_not_called()
        fake_client.create.assert_not_called()

    def test_assigns_arguments_and_flags(self, fake_client):
        options, _ = _completed(fake_client, dry_run=True, output="json")

        assert options.identity == IDENTITY
        assert options.user == USER
        assert options.dry_run is True
        assert options.output_format == "json"
        assert options.client is fake_client
        assert options.printer is not None

    def test_unknown_output_format_fails_before_building_client(self, fake_client):
        factory = MagicMock(return_value=fake_client)
        options = CreateUserIdentityMappingOptions(out=io.StringIO())

        with pytest.raises(UsageError, match='output format "table"'):
            options.complete([IDENTITY, USER], dry_run=False, output_format="table", client_factory=factory)

        factory.assert_not_called()

    def test_client_factory_errors_surface_unchanged(self):
        error = ConfigurationError("invalid configuration: no configuration has been provided")

        def factory():
            raise error

        options = CreateUserIdentityMappingOptions(out=io.StringIO())
        with pytest.raises(ConfigurationError) as exc_info:
            options.complete([IDENTITY, USER], dry_run=False, output_format="", client_factory=factory)

        assert exc_info.value is error


class TestValidate:
    def test_completed_options_are_valid(self, fake_client):
        _completed(fake_client)

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"identity": ""}, "identity is required"),
            ({"user": ""}, "user is required"),
            ({"client": None}, "UserIdentityMappingClient is required"),
            ({"out": None}, "Out is required"),
            ({"printer": None}, "Printer is required"),
        ],
    )
    def test_missing_fields(self, fake_client, overrides, message):
        options, _ = _completed(fake_client)
        for name, value in overrides.items():
            setattr(options, name, value)

        with pytest.raises(UsageError, match=message):
            options.validate()


class TestRun:
    def test_submits_mapping_and_prints_server_name(self, fake_client, server_payload):
        server_payload["metadata"]["name"] = "server-assigned"
        fake_client.create.return_value = UserIdentityMapping.model_validate(server_payload)
        options, out = _completed(fake_client)

        result = options.run()

        fake_client.create.assert_called_once()
        sent = fake_client.create.call_args.args[0]
        assert sent.identity.name == IDENTITY
        assert sent.user.name == USER
        assert result.metadata.name == "server-assigned"
        assert out.getvalue() == 'useridentitymapping "server-assigned" created\n'

    def test_dry_run_skips_client_and_prints_local_record(self, fake_client):
        options, out = _completed(fake_client, dry_run=True)

        result = options.run()

        fake_client.create.assert_not_called()
        assert result.metadata.uid is None
        assert out.getvalue() == f'useridentitymapping "{IDENTITY}" created (dry run)\n'

    def test_name_output_prints_identifier_only(self, fake_client):
        options, out = _completed(fake_client, output="name")

        options.run()

        assert out.getvalue() == f"useridentitymapping/{IDENTITY}\n"

    def test_json_output_dumps_server_object(self, fake_client):
        options, out = _completed(fake_client, output="json")

        options.run()

        text = out.getvalue()
        assert '"resourceVersion": "1042"' in text
        assert '"uid": "user-uid"' in text

    def test_remote_error_propagates_and_prints_nothing(self, fake_client):
        error = APIStatusError(
            Status(reason="Forbidden", message="useridentitymappings.user.openshift.io is forbidden", code=403),
            status_code=403,
        )
        fake_client.create.side_effect = error
        options, out = _completed(fake_client)

        with pytest.raises(APIStatusError) as exc_info:
            options.run()

        assert exc_info.value is error
        assert out.getvalue() == ""
