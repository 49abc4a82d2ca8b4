"""Tests for the typed response records."""

import json

from vrm.models import (
    AccessToken,
    AccessTokensList,
    Credentials,
    Installations,
    Logon,
    UserInfo,
    ViewPermissions,
)


def test_installations_from_dict(installations_payload):
    """A full extended record maps onto the typed fields."""
    inst = Installations.from_dict(installations_payload)

    assert inst.success is True
    assert inst.site_ids() == [151734, 2]
    boat = inst.records[0]
    assert boat.name == "Boat"
    assert boat.id_user == 22
    assert boat.pv_max == 1200
    assert boat.realtime_updates is True
    assert boat.has_mains == 1
    assert boat.tags[0].name == "alarm"
    assert boat.tags[0].automatic is True
    assert boat.view_permissions.update_settings is True
    assert boat.view_permissions.diagnostics is False
    assert boat.current_alarms == ["Low battery"]
    assert boat.mqtt_webhost == "webmqtt42.victronenergy.com"
    assert boat.raw["identifier"] == "c0619ab1c1a2"


def test_extended_attribute_nested_lists(installations_payload):
    attr = Installations.from_dict(installations_payload).records[0].extended[0]

    assert attr.code == "bs"
    assert attr.raw_value == "87.5"
    assert attr.instance == "512"
    assert attr.enum_values[0].name_enum == "Off"
    assert attr.data_attributes[0].dbus_path == "/Soc"
    assert attr.data_attributes[0].instance == 512


def test_sparse_installation_uses_defaults(installations_payload):
    cabin = Installations.from_dict(installations_payload).records[1]

    assert cabin.id_site == 2
    assert cabin.tags == []
    assert cabin.extended == []
    assert cabin.view_permissions == ViewPermissions()
    assert cabin.timezone == ""


def test_empty_installations():
    inst = Installations.from_dict({})
    assert inst.success is False
    assert inst.records == []


def test_access_tokens_list():
    tokens = AccessTokensList.from_dict({
        "success": True,
        "tokens": [
            {"name": "grafana", "idAccessToken": "17", "createdOn": "1690000000", "scope": "all", "expires": None},
        ],
    })
    assert tokens.success is True
    assert tokens.tokens[0].name == "grafana"
    assert tokens.tokens[0].id_access_token == "17"
    assert tokens.tokens[0].expires is None


def test_numeric_access_token_id_is_stringified():
    assert AccessToken.from_dict({"token": "t", "idAccessToken": 17}).id_access_token == "17"


def test_user_info():
    me = UserInfo.from_dict({
        "success": True,
        "user": {"id": 22, "name": "Jane", "email": "jane@example.com", "country": "nl"},
    })
    assert (me.id, me.name, me.country) == (22, "Jane", "nl")


def test_logon_json_omits_empty_fields():
    assert json.loads(Logon(token="jwt").to_json()) == {"token": "jwt"}


def test_credentials_json_is_tab_indented():
    text = Credentials("a@b.c", "pw").to_json()
    assert '\n\t"username": "a@b.c"' in text
    assert Credentials.from_json(text) == Credentials("a@b.c", "pw")


def test_non_numeric_ids_in_nested_records_fall_back_to_zero():
    """Garbage in a nested record does not break the whole installations list."""
    inst = Installations.from_dict({
        "success": True,
        "records": [{
            "idSite": "7",
            "tags": [{"idTag": "n/a", "name": "x"}],
            "extended": [{
                "idDataAttribute": "abc",
                "idDeviceType": None,
                "dataAttributeEnumValues": [{"nameEnum": "On", "valueEnum": "?"}],
                "dataAttributes": [{"instance": "none"}],
            }],
        }],
    })

    record = inst.records[0]
    assert record.id_site == 7
    assert record.tags[0].id_tag == 0
    attr = record.extended[0]
    assert (attr.id_data_attribute, attr.id_device_type) == (0, 0)
    assert attr.enum_values[0].value_enum == 0
    assert attr.data_attributes[0].instance == 0
