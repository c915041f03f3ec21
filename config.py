import os
#settings for the crossing-times pipeline, each one can be overridden from the environment

BASE = os.path.dirname(os.path.abspath(__file__))

#holy island causeway, used for every sunrise/sunset lookup
HOLY_ISLAND_LAT = float(os.getenv("HOLY_ISLAND_LAT", "55.6694"))
HOLY_ISLAND_LNG = float(os.getenv("HOLY_ISLAND_LNG", "-1.7975"))

SUN_API_URL = os.getenv("SUN_API_URL", "https://api.sunrisesunset.io/json")
SUN_API_TIMEOUT = float(os.getenv("SUN_API_TIMEOUT", "10"))#seconds, a timeout counts as a failed lookup
SUN_API_DELAY_SECONDS = float(os.getenv("SUN_API_DELAY_SECONDS", "0.1"))#pause after each real request
USER_AGENT = os.getenv("TIDES_USER_AGENT", "holy-island-crossings/1.0")

TIDES_OUTPUT_DIR = os.getenv("TIDES_OUTPUT_DIR", "data")#relative paths are taken from the repo root, see output_dir()
TIDES_DEFAULT_SOURCE = os.getenv("TIDES_DEFAULT_SOURCE", "./sourcedata/08-25.html")
TIDES_COMBINED_FILE = "tides.json"
TIDES_SOURCE_LABEL = os.getenv("TIDES_SOURCE_LABEL", "Northumberland Council Holy Island Crossing Times")
TIDES_LOG_LEVEL = os.getenv("TIDES_LOG_LEVEL", "INFO")


def output_dir(path=None):
    #one place to resolve where the json lives, the cli and the app must agree
    path = path or TIDES_OUTPUT_DIR
    return path if os.path.isabs(path) else os.path.join(BASE, path)
