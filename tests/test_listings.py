from tools.formatting import fmt_inr_compact
from tools.listings import load_listings


def test_featured_listings_load():
    items = load_listings()
    assert len(items) == 5
    raj = items[0]
    assert raj.owner_name == "Raj Sharma"
    assert fmt_inr_compact(raj.price) == "₹2.5 Cr"
    assert raj.tel_link == "tel:+919876543210"
    assert raj.mail_link == "mailto:raj.sharma@email.com"


def test_missing_listings_file(tmp_path):
    assert load_listings(tmp_path / "none.yaml") == []
