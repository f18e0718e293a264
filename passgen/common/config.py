# passgen/common/config.py
import os
from enum import Enum
from dotenv import load_dotenv
from passgen.common.constants import DEFAULT_PORT, MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH

class EnvVarType(Enum):
    INT = 1
    FLOAT = 2
    STR = 3

DEFAULT_CONFIG = {
    "SERVER_NAME": ("localhost", EnvVarType.STR),
    "SERVER_BIND_IP": ("127.0.0.1", EnvVarType.STR),
    "SERVER_PORT": (str(DEFAULT_PORT), EnvVarType.INT),

    "DEFAULT_PASSWORD_LENGTH": ("8", EnvVarType.INT),
    "POLL_INTERVAL": ("0.5", EnvVarType.FLOAT),
}

def get_config() -> dict[str, any]:
    # Load environment variables from .env
    load_dotenv()

    # Get environment variables
    config = {}
    for key, (default_val, var_type) in DEFAULT_CONFIG.items():
        val = os.getenv(key, default_val)
        if var_type == EnvVarType.INT:
            val = int(val)
        elif var_type == EnvVarType.FLOAT:
            val = float(val)
        elif var_type == EnvVarType.STR:
            val = str(val)
        else:
            raise ValueError(f"Unknown EnvVarType: {var_type}")
        config[key] = val

    if not 0 < config["SERVER_PORT"] < 65536:
        raise ValueError(f"SERVER_PORT out of range: {config['SERVER_PORT']}")
    if config["POLL_INTERVAL"] <= 0:
        raise ValueError(f"POLL_INTERVAL must be positive: {config['POLL_INTERVAL']}")
    if not MIN_PASSWORD_LENGTH <= config["DEFAULT_PASSWORD_LENGTH"] <= MAX_PASSWORD_LENGTH:
        raise ValueError(
            f"DEFAULT_PASSWORD_LENGTH must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH}: "
            f"{config['DEFAULT_PASSWORD_LENGTH']}"
        )

    return config
