# storefront/demo_products.py
"""
Demo catalog used by the seeding script.

Stock is not listed here; the seeder assigns it at random.
"""

_ALL_SIZES = ["S", "M", "L", "XL"]
_IMG = "https://images.unsplash.com/photo-{}?w=500"

# (name, description, price, image id, category)
_ROWS = [
    ("Classic White T-Shirt", "Premium cotton blend t-shirt with a comfortable everyday fit.", 24.99, "1521572163474-6864f9cf17ab", "Men"),
    ("Denim Jacket", "Classic denim jacket with button closure and chest pockets.", 79.99, "1551028719-00167b16eac5", "Men"),
    ("Slim Fit Jeans", "Slim-fit jeans in a stretch fabric, classic blue wash.", 59.99, "1542272604-787c3835535d", "Men"),
    ("Cotton Hoodie", "Cotton blend hoodie with drawstring hood and kangaroo pocket.", 49.99, "1556821840-3a63f95609a7", "Men"),
    ("Polo Shirt", "Breathable pique cotton polo with a three-button placket.", 39.99, "1583743814966-8936f5b7be1a", "Men"),
    ("Leather Jacket", "Genuine leather jacket with a zip front and quilted lining.", 199.99, "1551028719-00167b16eac5", "Men"),
    ("Cargo Pants", "Durable cargo pants with multiple utility pockets.", 54.99, "1506629905607-0e2e0e0b0c0d", "Men"),
    ("Sweatpants", "Soft fleece sweatpants with an elastic waistband.", 34.99, "1506629905607-0e2e0e0b0c0d", "Men"),
    ("Floral Summer Dress", "Light and airy dress with a floral print.", 64.99, "1595777457583-95e059d581b8", "Women"),
    ("Women's Denim Jacket", "Cropped denim jacket with a relaxed fit.", 69.99, "1551028719-00167b16eac5", "Women"),
    ("High-Waisted Jeans", "High-rise jeans with a flattering straight leg.", 59.99, "1542272604-787c3835535d", "Women"),
    ("Oversized Hoodie", "Relaxed oversized hoodie in brushed cotton.", 44.99, "1556821840-3a63f95609a7", "Women"),
    ("Blouse with Ruffles", "Flowing blouse with ruffle details at the neckline.", 49.99, "1594633312681-425c7b97ccd1", "Women"),
    ("Maxi Dress", "Floor-length dress with an adjustable waist tie.", 74.99, "1595777457583-95e059d581b8", "Women"),
    ("Leather Moto Jacket", "Asymmetric zip moto jacket in soft leather.", 189.99, "1551028719-00167b16eac5", "Women"),
    ("Yoga Leggings", "High-waisted stretch leggings for training or lounging.", 39.99, "1506629905607-0e2e0e0b0c0d", "Women"),
    ("Kids' Graphic T-Shirt", "Fun printed tee in soft cotton.", 19.99, "1521572163474-6864f9cf17ab", "Kids"),
    ("Children's Denim Jacket", "Sturdy denim jacket sized for kids.", 39.99, "1551028719-00167b16eac5", "Kids"),
    ("Kids' Jeans", "Comfortable jeans with an adjustable waist.", 29.99, "1542272604-787c3835535d", "Kids"),
    ("Children's Hoodie", "Warm hoodie with a front pocket.", 34.99, "1556821840-3a63f95609a7", "Kids"),
    ("Girls' Floral Dress", "Twirly cotton dress with a floral print.", 39.99, "1595777457583-95e059d581b8", "Kids"),
    ("Kids' Sweatpants", "Cozy sweatpants for play and school.", 24.99, "1506629905607-0e2e0e0b0c0d", "Kids"),
]

DEMO_PRODUCTS: list[dict] = [
    {
        "name": name,
        "description": description,
        "price": price,
        "image_url": _IMG.format(image),
        "category": category,
        "sizes": list(_ALL_SIZES),
    }
    for name, description, price, image, category in _ROWS
]
