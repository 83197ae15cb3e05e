def test_import_ordeal_package() -> None:
    import importlib

    module = importlib.import_module("ordeal")
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from ordeal.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)

