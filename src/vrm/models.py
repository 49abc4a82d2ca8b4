"""Typed records for VRM API requests and responses.

Every record is built with ``from_dict`` from the decoded JSON body. Missing
keys fall back to the field default and the original dict is kept in ``raw``
so nothing the API adds later is lost.
"""

import json
from dataclasses import dataclass, field
from typing import Any


def _dump(data: dict) -> str:
    return json.dumps(data, indent="\t")


def _load(text: str | bytes) -> dict:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _as_int(value: Any) -> int:
    """Convert a JSON number or numeric string; anything else becomes 0."""
    if value is None:
        return 0
    try:
        return int(value)
    except (ValueError, TypeError):
        return 0


# ── Session records ──────────────────────────────────────────────────────


@dataclass
class Credentials:
    """Username and password posted to /auth/login."""

    username: str = ""
    password: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Credentials":
        return cls(
            username=data.get("username") or "",
            password=data.get("password") or "",
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Credentials":
        return cls.from_dict(_load(text))

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "password": self.password}

    def to_json(self) -> str:
        return _dump(self.to_dict())


@dataclass
class Logon:
    """Bearer session returned by /auth/login."""

    token: str = ""
    id_user: int = 0
    verification_mode: str = ""
    verification_sent: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Logon":
        return cls(
            token=data.get("token") or "",
            id_user=_as_int(data.get("idUser")),
            verification_mode=data.get("verification_mode") or "",
            verification_sent=bool(data.get("verification_sent")),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Logon":
        return cls.from_dict(_load(text))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"token": self.token}
        if self.id_user:
            out["idUser"] = self.id_user
        if self.verification_mode:
            out["verification_mode"] = self.verification_mode
        if self.verification_sent:
            out["verification_sent"] = self.verification_sent
        return out

    def to_json(self) -> str:
        return _dump(self.to_dict())


@dataclass
class AccessToken:
    """Personal access token, as returned by accesstokens/create."""

    token: str = ""
    id_access_token: str = ""
    success: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "AccessToken":
        return cls(
            token=data.get("token") or "",
            id_access_token=str(data.get("idAccessToken") or ""),
            success=bool(data.get("success")),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "AccessToken":
        return cls.from_dict(_load(text))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.success:
            out["success"] = self.success
        out["token"] = self.token
        if self.id_access_token:
            out["idAccessToken"] = self.id_access_token
        return out

    def to_json(self) -> str:
        return _dump(self.to_dict())


# ── Users ────────────────────────────────────────────────────────────────


@dataclass
class UserInfo:
    """The authenticated user, from /users/me."""

    id: int = 0
    name: str = ""
    email: str = ""
    country: str = ""
    access_token: str = ""
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "UserInfo":
        user = data.get("user") or {}
        return cls(
            id=_as_int(user.get("id")),
            name=user.get("name") or "",
            email=user.get("email") or "",
            country=user.get("country") or "",
            access_token=user.get("accessToken") or "",
            raw=data,
        )


# ── Access token list ────────────────────────────────────────────────────


@dataclass
class AccessTokenInfo:
    name: str = ""
    id_access_token: str = ""
    created_on: str = ""
    scope: str = ""
    expires: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "AccessTokenInfo":
        return cls(
            name=data.get("name") or "",
            id_access_token=str(data.get("idAccessToken") or ""),
            created_on=data.get("createdOn") or "",
            scope=data.get("scope") or "",
            expires=data.get("expires"),
        )


@dataclass
class AccessTokensList:
    """Body of /users/{idUser}/accesstokens/list."""

    success: bool = False
    tokens: list[AccessTokenInfo] = field(default_factory=list)
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "AccessTokensList":
        return cls(
            success=bool(data.get("success")),
            tokens=[AccessTokenInfo.from_dict(t) for t in data.get("tokens") or []],
            raw=data,
        )


# ── Installations ────────────────────────────────────────────────────────


@dataclass
class Tag:
    id_tag: int = 0
    name: str = ""
    automatic: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Tag":
        return cls(
            id_tag=_as_int(data.get("idTag")),
            name=data.get("name") or "",
            automatic=bool(data.get("automatic")),
        )


@dataclass
class ViewPermissions:
    """What the current user may see or do on an installation."""

    update_settings: bool = False
    settings: bool = False
    diagnostics: bool = False
    share: bool = False
    vnc: bool = False
    mqtt_rpc: bool = False
    vebus: bool = False
    twoway: bool = False
    exact_location: bool = False
    nodered: bool = False
    nodered_dash: bool = False
    signalk: bool = False
    paygo: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "ViewPermissions":
        # Wire keys already match the attribute names
        return cls(**{
            name: bool(data.get(name))
            for name in cls.__dataclass_fields__
        })


@dataclass
class EnumValue:
    name_enum: str = ""
    value_enum: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "EnumValue":
        return cls(
            name_enum=data.get("nameEnum") or "",
            value_enum=_as_int(data.get("valueEnum")),
        )


@dataclass
class DataAttribute:
    instance: int = 0
    dbus_service_type: str = ""
    dbus_path: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "DataAttribute":
        return cls(
            instance=_as_int(data.get("instance")),
            dbus_service_type=data.get("dbusServiceType") or "",
            dbus_path=data.get("dbusPath") or "",
        )


@dataclass
class ExtendedAttribute:
    """One entry of the ``extended`` list returned with ``extended=1``."""

    id_data_attribute: int = 0
    code: str = ""
    description: str = ""
    format_with_unit: str = ""
    data_type: str = ""
    id_device_type: int = 0
    text_value: Any = None
    instance: str = ""
    timestamp: str = ""
    dbus_service_type: Any = None
    dbus_path: Any = None
    raw_value: Any = None
    formatted_value: str = ""
    instances: Any = None
    enum_values: list[EnumValue] = field(default_factory=list)
    data_attributes: list[DataAttribute] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ExtendedAttribute":
        return cls(
            id_data_attribute=_as_int(data.get("idDataAttribute")),
            code=data.get("code") or "",
            description=data.get("description") or "",
            format_with_unit=data.get("formatWithUnit") or "",
            data_type=data.get("dataType") or "",
            id_device_type=_as_int(data.get("idDeviceType")),
            text_value=data.get("textValue"),
            instance=str(data.get("instance") or ""),
            timestamp=str(data.get("timestamp") or ""),
            dbus_service_type=data.get("dbusServiceType"),
            dbus_path=data.get("dbusPath"),
            raw_value=data.get("rawValue"),
            formatted_value=data.get("formattedValue") or "",
            instances=data.get("instances"),
            enum_values=[
                EnumValue.from_dict(v) for v in data.get("dataAttributeEnumValues") or []
            ],
            data_attributes=[
                DataAttribute.from_dict(v) for v in data.get("dataAttributes") or []
            ],
        )


@dataclass
class Installation:
    """A single site (``idSite``) visible to the user."""

    id_site: int = 0
    access_level: int = 0
    owner: bool = False
    is_admin: bool = False
    name: str = ""
    identifier: str = ""
    id_user: int = 0
    pv_max: int = 0
    timezone: str = ""
    phonenumber: Any = None
    notes: Any = None
    geofence: Any = None
    geofence_enabled: bool = False
    realtime_updates: bool = False
    has_mains: int = 0
    has_generator: int = 0
    no_data_alarm_timeout: int = 0
    alarm_monitoring: int = 0
    invalid_vrm_auth_token_used_in_log_request: int = 0
    syscreated: int = 0
    grafana_enabled: int = 0
    is_paygo: int = 0
    paygo_currency: Any = None
    paygo_total_amount: Any = None
    inverter_charger_control: int = 0
    shared: bool = False
    device_icon: str = ""
    alarm: bool = False
    last_timestamp: int = 0
    tags: list[Tag] = field(default_factory=list)
    current_time: str = ""
    timezone_offset: int = 0
    images: bool = False
    view_permissions: ViewPermissions = field(default_factory=ViewPermissions)
    extended: list[ExtendedAttribute] = field(default_factory=list)
    demo_mode: bool = False
    mqtt_webhost: str = ""
    high_workload: bool = False
    current_alarms: list[str] = field(default_factory=list)
    num_alarms: int = 0
    avatar_url: Any = None
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Installation":
        def _int(key: str) -> int:
            return _as_int(data.get(key))

        return cls(
            id_site=_int("idSite"),
            access_level=_int("accessLevel"),
            owner=bool(data.get("owner")),
            is_admin=bool(data.get("is_admin")),
            name=data.get("name") or "",
            identifier=data.get("identifier") or "",
            id_user=_int("idUser"),
            pv_max=_int("pvMax"),
            timezone=data.get("timezone") or "",
            phonenumber=data.get("phonenumber"),
            notes=data.get("notes"),
            geofence=data.get("geofence"),
            geofence_enabled=bool(data.get("geofenceEnabled")),
            realtime_updates=bool(data.get("realtimeUpdates")),
            has_mains=_int("hasMains"),
            has_generator=_int("hasGenerator"),
            no_data_alarm_timeout=_int("noDataAlarmTimeout"),
            alarm_monitoring=_int("alarmMonitoring"),
            invalid_vrm_auth_token_used_in_log_request=_int(
                "invalidVRMAuthTokenUsedInLogRequest"
            ),
            syscreated=_int("syscreated"),
            grafana_enabled=_int("grafanaEnabled"),
            is_paygo=_int("isPaygo"),
            paygo_currency=data.get("paygoCurrency"),
            paygo_total_amount=data.get("paygoTotalAmount"),
            inverter_charger_control=_int("inverterChargerControl"),
            shared=bool(data.get("shared")),
            device_icon=data.get("device_icon") or "",
            alarm=bool(data.get("alarm")),
            last_timestamp=_int("last_timestamp"),
            tags=[Tag.from_dict(t) for t in data.get("tags") or []],
            current_time=data.get("current_time") or "",
            timezone_offset=_int("timezone_offset"),
            images=bool(data.get("images")),
            view_permissions=ViewPermissions.from_dict(data.get("view_permissions") or {}),
            extended=[ExtendedAttribute.from_dict(e) for e in data.get("extended") or []],
            demo_mode=bool(data.get("demo_mode")),
            mqtt_webhost=data.get("mqtt_webhost") or "",
            high_workload=bool(data.get("high_workload")),
            current_alarms=list(data.get("current_alarms") or []),
            num_alarms=_int("num_alarms"),
            avatar_url=data.get("avatar_url"),
            raw=data,
        )


@dataclass
class Installations:
    """Body of /users/{idUser}/installations."""

    success: bool = False
    records: list[Installation] = field(default_factory=list)
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Installations":
        return cls(
            success=bool(data.get("success")),
            records=[Installation.from_dict(r) for r in data.get("records") or []],
            raw=data,
        )

    def site_ids(self) -> list[int]:
        return [r.id_site for r in self.records]
