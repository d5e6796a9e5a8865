import json
import os

RED = "#ff0000"


def as_json():
    return json.dumps({"red": RED, "pid": os.getpid()})
