MEALIME_BASE = "https://app.mealime.com"

LOGIN_PATH = "/login"
SESSIONS_PATH = "/sessions"
APP_PATH = "/"
GROCERY_ITEMS_PATH = "/api/grocery_list_items"
MEAL_PLAN_PATH = "/api/meal_plan"

AUTH_COOKIE_DOMAIN = "mealime.com"
AUTH_COOKIE_PATH = "/"
AUTH_COOKIE_NAME = "auth_token"

CHROME_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/105.0.0.0 Safari/537.36"
)

# Sent on every request of the session
BROWSER_HEADERS = {
    "user-agent": CHROME_UA,
    "pragma": "no-cache",
}


def login_form_headers(base_url: str) -> dict[str, str]:
    """Exact headers of the browser's login form navigation."""
    return {
        "Referer": f"{base_url}{LOGIN_PATH}",
        "Origin": base_url,
        "Authority": base_url,
        "Connection": "keep-alive",
        "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:101.0) Gecko/20100101 Firefox/101.0",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Content-Type": "application/x-www-form-urlencoded",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "same-origin",
        "Sec-Fetch-User": "?1",
    }


def xhr_headers(base_url: str, *, accept: str = "*/*") -> dict[str, str]:
    """Headers the Angular front-end sends on its API calls."""
    return {
        "accept": accept,
        "accept-language": "en-GB,en-US;q=0.9,en;q=0.8",
        "cache-control": "no-cache",
        "pragma": "no-cache",
        "sec-ch-ua": '"Google Chrome";v="105", "Not)A;Brand";v="8", "Chromium";v="105"',
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"macOS"',
        "sec-fetch-dest": "empty",
        "sec-fetch-mode": "cors",
        "sec-fetch-site": "same-origin",
        "referer": f"{base_url}/",
    }
