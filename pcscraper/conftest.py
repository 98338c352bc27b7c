"""
Shared test helpers: sample model output and sample listing records.
"""
from pcscraper.models import ListingRecord


def listing_data(**overrides):
    """A JSON object as the model would return it for a good listing page."""
    data = {
        "title": "Gaming PC RTX 3070",
        "price": "$1,200",
        "brand": "Custom",
        "model": "Unknown",
        "cpu": "AMD Ryzen 5 5600X",
        "ram": "16GB DDR4",
        "storage": "1TB NVMe",
        "availability": "Available",
        "quantity": "1",
        "location": "Toronto, ON",
        "description": "Barely used, includes original boxes",
        "imageUrl": "https://scontent.example.com/img.jpg",
        "originalUrl": "https://www.facebook.com/marketplace/item/999/",
    }
    data.update(overrides)
    return data


def make_record(title="Gaming PC", price="$100", **overrides):
    values = dict(
        title=title,
        price=price,
        brand="Dell",
        model="XPS 8940",
        cpu="Intel i7-10700",
        ram="16GB DDR4",
        storage="512GB SSD",
        availability="Available",
        quantity="1",
        location="Austin, TX",
        description="Works great",
        image_url="https://img.example.com/1.jpg",
        original_url="https://www.facebook.com/marketplace/item/1/",
    )
    values.update(overrides)
    return ListingRecord(**values)
