from dataclasses import dataclass
from pathlib import Path
from typing import List
import yaml

LISTINGS_PATH = Path(__file__).resolve().parent.parent / "config" / "listings.yaml"


@dataclass
class Listing:
    id: str
    owner_name: str
    location: str
    price: float
    bedrooms: int
    bathrooms: int
    square_feet: int
    image_url: str
    phone: str
    email: str

    @property
    def tel_link(self) -> str:
        return "tel:" + self.phone.replace(" ", "")

    @property
    def mail_link(self) -> str:
        return "mailto:" + self.email


def load_listings(path: Path = LISTINGS_PATH) -> List[Listing]:
    """Featured listings for the home page; empty when the file is missing."""
    if not path.exists():
        return []
    items = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    return [Listing(**{**it, "id": str(it["id"])}) for it in items]
