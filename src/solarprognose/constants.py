"""
Constants for the Solarprognose provider plugin.
Includes the request template, configuration keys and defaults.
"""

BASE_URL = (
    "http://{provider_host}/web/solarprediction/api/v1"
    "?access-token={token}&item={item}&id={elementid}&type=hourly&_format=json"
    "&algorithm={algorithm}&project=solarreader"
    "&start_epoch_time={starttime}&end_epoch_time={endtime}"
)

# prefix of all forecast keys in the flattened response
DATA = "data_"
SUFFIX_POWER = "0"  # instant forecast in kW
SUFFIX_ACCUMULATED = "1"  # accumulated forecast in kWh
SUFFIX_TIMESTAMP = "ts"  # unix seconds

STATUS = "status"
MESSAGE = "message"

# configuration keys
TOKEN = "token"
ELEMENTID = "elementid"
ALGORITHM = "algorithm"
ITEM = "item"
PROVIDER_HOST = "provider_host"
PROVIDER_PORT = "provider_port"
STARTTIME = "starttime"
ENDTIME = "endtime"

ALGORITHM_OPTIONS = ["", "own-v1", "mosmix"]

DEFAULT_ALGORITHM = "mosmix"
DEFAULT_ITEM = "plant"
DEFAULT_PROVIDER_HOST = "www.solarprognose.de"
DEFAULT_PROVIDER_PORT = 80
DEFAULT_READ_TIMEOUT_MS = 5000
DEFAULT_LOCALE = "en"

FORECAST_WINDOW_HOURS = 23
HOURS_PER_DAY = 24
