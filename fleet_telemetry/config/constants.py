"""Geographic envelope, fleet sizing, tick timing, and attribute profiles."""

# =============================================================================
# Geography
# =============================================================================

# Cologne service area (lat, lng)
GEO_BOUNDS = {
    "southwest": {"lat": 50.917, "lng": 6.844},
    "northeast": {"lat": 50.972, "lng": 7.08},
}

PATH_STEPS = 20            # Points per vehicle path
PATH_STEP_MAX = 0.001      # Max per-axis offset between consecutive points (degrees)

# =============================================================================
# Fleet & Ticker
# =============================================================================

FLEET_SIZE = 10
TICK_INTERVAL_S = 1.0
UPDATE_PROBABILITY = 0.5   # Per vehicle, per tick

STATUS_MOVING = "moving"
STATUS_STOPPED = "not"

# =============================================================================
# Server
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
HEALTH_PATH = "/healthz"

EVENT_SNAPSHOT = "vehicles"
EVENT_UPDATE = "vehicleUpdate"

# =============================================================================
# Attribute Profiles
# =============================================================================

# Attribute order matches the dashboard payload.
ATTRIBUTE_NAMES = [
    "speed",
    "battery_level",
    "temperature",
    "tire_pressure",
    "motor_efficiency",
    "oil_level",
    "brake_fluid",
    "coolant_level",
    "fuel_level",
    "engine_load",
    "gps_accuracy",
]

# Random-walk attributes: "delta" is the half-width of the uniform step.
# Drain attributes: "drain" is the max amount removed per tick, floored at "lower".
BASE_ATTRIBUTES = {
    "speed":            {"lower": 10.0, "upper": 120.0, "delta": 5.0,  "initial": (30.0, 60.0)},
    "battery_level":    {"lower": 0.0,  "upper": 100.0, "drain": 1.5,  "initial": (50.0, 100.0)},
    "temperature":      {"lower": 15.0, "upper": 60.0,  "delta": 1.0,  "initial": (20.0, 40.0)},
    "tire_pressure":    {"lower": 25.0, "upper": 40.0,  "delta": 0.25, "initial": (30.0, 35.0)},
    "motor_efficiency": {"lower": 70.0, "upper": 100.0, "delta": 0.25, "initial": (85.0, 95.0)},
    "oil_level":        {"lower": 0.0,  "upper": 100.0, "drain": 0.5,  "initial": (50.0, 100.0)},
    "brake_fluid":      {"lower": 0.0,  "upper": 100.0, "drain": 0.5,  "initial": (50.0, 100.0)},
    "coolant_level":    {"lower": 0.0,  "upper": 100.0, "drain": 0.5,  "initial": (50.0, 100.0)},
    "fuel_level":       {"lower": 0.0,  "upper": 100.0, "drain": 1.0,  "initial": (20.0, 70.0)},
    "engine_load":      {"lower": 40.0, "upper": 90.0,  "delta": 1.0,  "initial": (50.0, 80.0)},
    "gps_accuracy":     {"lower": 3.0,  "upper": 15.0,  "delta": 0.1,  "initial": (5.0, 10.0)},
}

TUNED_ATTRIBUTES = {
    "speed":            {"lower": 15.0, "upper": 100.0, "delta": 3.0,  "initial": (30.0, 60.0)},
    "battery_level":    {"lower": 0.0,  "upper": 100.0, "drain": 0.8,  "initial": (50.0, 100.0)},
    "temperature":      {"lower": 15.0, "upper": 55.0,  "delta": 0.8,  "initial": (20.0, 40.0)},
    "tire_pressure":    {"lower": 26.0, "upper": 38.0,  "delta": 0.2,  "initial": (30.0, 35.0)},
    "motor_efficiency": {"lower": 75.0, "upper": 100.0, "delta": 0.2,  "initial": (85.0, 95.0)},
    "oil_level":        {"lower": 0.0,  "upper": 100.0, "drain": 0.3,  "initial": (50.0, 100.0)},
    "brake_fluid":      {"lower": 0.0,  "upper": 100.0, "drain": 0.3,  "initial": (50.0, 100.0)},
    "coolant_level":    {"lower": 0.0,  "upper": 100.0, "drain": 0.3,  "initial": (50.0, 100.0)},
    "fuel_level":       {"lower": 0.0,  "upper": 100.0, "drain": 0.6,  "initial": (20.0, 70.0)},
    "engine_load":      {"lower": 40.0, "upper": 85.0,  "delta": 0.8,  "initial": (50.0, 80.0)},
    "gps_accuracy":     {"lower": 3.0,  "upper": 12.0,  "delta": 0.08, "initial": (5.0, 10.0)},
}

# Probability that regenerative braking stays enabled on a given tick
REGEN_KEEP_PROBABILITY = {"base": 0.90, "tuned": 0.95}

# =============================================================================
# Fault Rules
# =============================================================================

FAULT_RULES = {
    "base": {
        "fault_probability": 0.30,
        "issue_ticks": (180, 240),       # [lo, hi) ticks
        "battery_low": 20.0,
        "tire_pressure_band": (28.0, 36.0),
        "temperature_high": 50.0,
        "regen_fault_gate": 1.0,
    },
    "tuned": {
        "fault_probability": 0.10,
        "issue_ticks": (120, 180),
        "battery_low": 20.0,
        "tire_pressure_band": (28.0, 36.0),
        "temperature_high": 50.0,
        "regen_fault_gate": 0.3,
    },
}

FAULT_MESSAGES = {
    "battery": "Low battery level",
    "tire_pressure": "Tire pressure out of range",
    "temperature": "Overheating",
    "regen": "Regenerative braking disabled",
}

# Self-correction applied to healthy vehicles before fault evaluation (tuned only)
RECOVERY_RULES = {
    "tuned": {
        "probability": 0.20,
        "battery_boost": (2.0, 5.0),
        "coolant_boost": (1.0, 3.0),
        "tire_pressure_target": 32.0,
        "tire_pressure_pull": 0.5,
    },
}

PROFILE_NAMES = ["base", "tuned"]
