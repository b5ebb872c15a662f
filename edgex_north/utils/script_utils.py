import json
import os
from typing import List

import yaml

from edgex_north.reading import Reading


def load_yaml_config(config_file: str) -> dict:
    """
    Load a YAML configuration file.
    """
    try:
        with open(config_file, "r") as file:
            config = yaml.load(file, Loader=yaml.FullLoader)
    except FileNotFoundError:
        exception_msg = f"CONFIG NOT FOUND. ENSURE THE FILE EXISTS: {os.path.abspath(config_file)}"
        raise Exception(exception_msg)

    return config if config else {}


def load_readings(readings_file: str) -> List[Reading]:
    """
    Load readings from a JSON file holding a list of host readings, e.g.
    [{"asset_code": "pump-1", "id": 1, "user_ts": "2024-05-01T12:00:00+00:00",
      "reading": {"temperature": 21.5}}]
    """
    with open(readings_file, "r") as file:
        data = json.load(file)

    if isinstance(data, dict):
        data = data.get("readings", [data])
    if not isinstance(data, list):
        raise TypeError("Readings file must hold a list of readings")

    return [Reading.from_dict(item) for item in data]
