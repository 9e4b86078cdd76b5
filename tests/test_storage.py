from docflow.core.storage import CookieJar, LocalStore, Navigator, ROLE_KEY, TOKEN_KEY, TokenStorage


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_local_store_items(store):
    store.set_item("a", "1")
    store.set_item("a", "2")
    store.set_item("b", "x")

    assert store.get_item("a") == "2"
    assert sorted(store.keys()) == ["a", "b"]

    store.remove_item("a")
    store.remove_item("missing")
    assert store.get_item("a") is None


def test_cookie_header_format_and_expiry():
    clock = FakeClock()
    jar = CookieJar(clock=clock)

    header = jar.set("token", "abc", max_age=60)
    assert header == "token=abc; path=/; max-age=60"
    assert jar.get("token") == "abc"

    clock.now += 61
    assert jar.get("token") is None


def test_cookie_delete_uses_zero_max_age():
    jar = CookieJar()
    jar.set("userRole", "admin", max_age=60)

    assert jar.delete("userRole") == "userRole=; path=/; max-age=0"
    assert jar.as_dict() == {}


def test_token_falls_back_to_cookie():
    store = LocalStore("sqlite://")
    cookies = CookieJar()
    tokens = TokenStorage(store, cookies, max_age=60)
    try:
        cookies.set(TOKEN_KEY, "from-cookie", max_age=60)
        assert tokens.get_token() == "from-cookie"

        tokens.set_token("from-store")
        tokens.set_role("director")
        assert tokens.get_token() == "from-store"
        assert cookies.header() == "token=from-store; userRole=director"

        tokens.clear()
        assert tokens.get_token() is None
        assert store.get_item(ROLE_KEY) is None
    finally:
        store.dispose()


def test_navigator_history():
    navigator = Navigator("/")
    navigator.navigate("/login")
    assert navigator.location == "/login"
    assert navigator.history == ["/", "/login"]
