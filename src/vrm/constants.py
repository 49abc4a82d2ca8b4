"""Constants for the Victron VRM API."""

API_BASE_URL = "https://vrmapi.victronenergy.com/v2"

# Seconds, applied as aiohttp.ClientTimeout(total=...)
REQUEST_TIMEOUT = 30

AUTH_HEADER = "X-Authorization"
BEARER_SCHEME = "Bearer"
TOKEN_SCHEME = "Token"

# Body returned by /auth/logout once the bearer token is blacklisted
LOGOUT_OK_BODY = {"token": ""}

# Known request paths under /installations/{idSite}/
# https://vrm-api-docs.victronenergy.com
REQUESTS_LIST = (
    "system-overview",
    "diagnostics",
    "gps-download",
    "tags",
    "data-download",
    "stats",
    "overallstats",
    "widgets/Graph",
    "widgets/GPS",
    "widgets/HoursOfAc",
    "widgets/GeneratorState",
    "widgets/InputState",
    "widgets/InverterState",
    "widgets/MPPTState",
    "widgets/ChargerState",
    "widgets/EssBatteryLifeState",
    "widgets/FuelCellState",
    "widgets/BatteryExternalRelayState",
    "widgets/BatteryRelayState",
    "widgets/BatteryMonitorWarningsAndAlarms",
    "widgets/GatewayRelayState",
    "widgets/GatewayRelayTwoState",
    "widgets/ChargerRelayState",
    "widgets/SolarChargerRelayState",
    "widgets/VeBusState",
    "widgets/VeBusWarningsAndAlarms",
    "widgets/InverterChargerState",
    "widgets/InverterChargerWarningsAndAlarms",
    "widgets/BatterySummary",
    "widgets/BMSDiagnostics",
    "widgets/HistoricData",
    "widgets/IOExtenderInOut",
    "widgets/LithiumBMS",
    "widgets/DCMeter",
    "widgets/EvChargerSummary",
    "widgets/MeteorologicalSensor",
    "widgets/GlobalLinkSummary",
    "widgets/MotorSummary",
    "widgets/PVInverterStatus",
    "widgets/SolarChargerSummary",
    "widgets/Status",
    "widgets/TankSummary",
    "widgets/TempSummaryAndGraph",
)
