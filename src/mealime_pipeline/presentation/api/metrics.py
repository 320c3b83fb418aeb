from prometheus_client import CollectorRegistry, Counter

registry = CollectorRegistry()

LOGINS = Counter(
    "mealime_logins_total",
    "login attempts by outcome",
    ["status"],
    registry=registry,
)
ITEMS_SUBMITTED = Counter(
    "mealime_grocery_items_total",
    "grocery items sent to Mealime by outcome",
    ["outcome"],
    registry=registry,
)
