from boardstore.server.utils import new_id


def test_new_id_shape() -> None:
    token = new_id()
    assert len(token) == 26
    assert token == token.lower()
    assert set(token) <= set("ybndrfg8ejkmcpqxot1uwisza345h769")


def test_new_id_unique() -> None:
    assert len({new_id() for _ in range(1000)}) == 1000
