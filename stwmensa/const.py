DOMAIN = "stwmensa"

MENU_URL = "https://www.stw.berlin/xhr/speiseplan-wochentag.html"
DEFAULT_MENSA_ID = "322"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3050
DEFAULT_TIMEOUT = 30.0
DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOG_LEVEL = "INFO"

CONF_HOST = "host"
CONF_PORT = "port"
CONF_URL = "url"
CONF_MENSA_ID = "mensa_id"
CONF_TIMEOUT = "timeout"
CONF_TIMEZONE = "timezone"
CONF_LOG_LEVEL = "log_level"

# form fields expected by the speiseplan endpoint
FORM_DATE = "date"
FORM_RESOURCES_ID = "resources_id"

# query parameters of the /menu route
QUERY_DATE = "date"
QUERY_MENSA = "mensa"

SEL_GROUP_WRAPPER = ".splGroupWrapper"
SEL_GROUP_NAME = ".splGroup"
SEL_MEAL = ".splMeal"
SEL_MEAL_NAME = "span.bold"
SEL_MEAL_PRICE = "div.text-right"
SEL_MEAL_TAG = "span[role='tooltip']"
