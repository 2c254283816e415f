import pytest


def test_imports():
    pytest.importorskip("requests")

    import quotemaker.services.market_data as md
    import quotemaker.services.pricing as pr
    import quotemaker.services.quoting_engine as qe

    assert hasattr(md, "fetch_global_quote")
    assert hasattr(qe, "QuotingEngine")
    assert hasattr(pr, "derive_market")
