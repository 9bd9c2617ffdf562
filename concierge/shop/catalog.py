"""Read-only product catalog with keyword alias expansion."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

# Maps common shopper vocabulary to keywords found in product titles.
SEARCH_ALIASES: dict[str, list[str]] = {
    "audio": [
        "headphones", "earbuds", "speaker", "echo dot", "noise cancelling", "airpods",
        "bose", "sony wh-", "quietcomfort", "spatial audio", "xm5",
    ],
    "music": ["headphones", "earbuds", "speaker"],
    "headphones": ["earbuds", "noise cancelling", "over-ear", "wh-1000", "quietcomfort", "airpods pro"],
    "earbuds": ["airpods", "in-ear"],
    "speakers": ["speaker", "echo", "alexa", "smart speaker", "echo dot"],
    "sound": ["headphones", "earbuds", "speaker"],
    "tech": ["usb", "cable", "mouse", "keyboard", "speaker", "headphones", "echo"],
    "electronics": ["usb", "cable", "mouse", "keyboard", "speaker", "headphones", "echo"],
    "accessories": ["cable", "mouse", "keyboard", "usb"],
    "cables": ["usb", "cable", "usb-c", "usb c"],
    "charger": ["usb", "cable", "charging", "fast charging", "power delivery"],
    "charging": ["usb", "cable", "charger", "power delivery"],
    "outdoor": ["hiking", "boots", "trekking", "mountaineering", "trail"],
    "hiking": ["boots", "trekking", "trail", "outdoor", "waterproof", "gtx"],
    "boots": ["hiking", "trekking", "mountaineering", "waterproof"],
    "shoes": ["boots", "hiking", "trekking"],
    "trekking": ["hiking", "boots", "mountaineering"],
    "smart home": ["alexa", "echo", "smart speaker"],
    "smart": ["alexa", "echo", "smart speaker"],
    "alexa": ["echo", "smart speaker", "echo dot"],
}

PRODUCTS: list[dict[str, Any]] = [
    {
        "id": "B08N5WRWNW",
        "title": "Echo Dot (4th Gen) | Smart speaker with Alexa | Charcoal",
        "price": 49.99,
        "rating": 4.5,
        "num_ratings": 123456,
        "delivery_date": "2025-01-15",
        "description": (
            "Meet the Echo Dot - Our most popular smart speaker with Alexa. The sleek, compact design "
            "delivers crisp vocals and balanced bass for full sound. Control smart home devices, play "
            "music, get weather updates, and more with just your voice."
        ),
        "images": ["https://m.media-amazon.com/images/I/714Rq4k05UL._AC_SL1000_.jpg"],
    },
    {
        "id": "HB001",
        "title": "Salomon Quest 4 GTX Hiking Boots - Men's Waterproof Trekking Shoes",
        "price": 229.95,
        "rating": 4.8,
        "num_ratings": 3421,
        "delivery_date": "2025-01-12",
        "description": (
            "Premium hiking boots with GORE-TEX waterproofing, advanced chassis for ankle support, and "
            "Contagrip outsole. Perfect for multi-day treks and challenging terrain including Himalayan "
            "expeditions. Features 4D Advanced Chassis for stability on rough terrain."
        ),
        "images": ["https://example.com/salomon-quest4.jpg"],
    },
    {
        "id": "HB002",
        "title": "Merrell Moab 3 Mid Waterproof Hiking Boots - All Terrain Trekking",
        "price": 149.99,
        "rating": 4.6,
        "num_ratings": 8934,
        "delivery_date": "2025-01-13",
        "description": (
            "Versatile hiking boots with waterproof membrane, cushioned midsole, and Vibram TC5+ outsole. "
            "Great balance of comfort and durability for day hikes and moderate treks. Bellows tongue "
            "keeps debris out."
        ),
        "images": ["https://example.com/merrell-moab3.jpg"],
    },
    {
        "id": "HB003",
        "title": "La Sportiva Nepal Extreme GTX - High Altitude Mountaineering Boots",
        "price": 599.00,
        "rating": 4.9,
        "num_ratings": 892,
        "delivery_date": "2025-01-18",
        "description": (
            "Professional mountaineering boots designed for extreme high-altitude expeditions. Features "
            "Vibram sole, GORE-TEX Insulated Comfort lining, and crampon-compatible. Used by mountaineers "
            "on Everest and K2. Exceptional warmth down to -40°C."
        ),
        "images": ["https://example.com/lasportiva-nepal.jpg"],
    },
    {
        "id": "HB004",
        "title": "Columbia Newton Ridge Plus Waterproof Hiking Boot - Budget Trek Shoes",
        "price": 89.99,
        "rating": 4.3,
        "num_ratings": 15432,
        "delivery_date": "2025-01-11",
        "description": (
            "Affordable waterproof hiking boots with Omni-Grip rubber outsole and cushioned midsole. Good "
            "for casual hiking and light trails. May not provide sufficient support for extreme "
            "conditions or heavy backpacking."
        ),
        "images": ["https://example.com/columbia-newton.jpg"],
    },
    {
        "id": "USB001",
        "title": "Anker USB C to USB C Cable 6ft (2m) - 100W Fast Charging",
        "price": 12.99,
        "rating": 4.7,
        "num_ratings": 45231,
        "delivery_date": "2025-01-10",
        "description": (
            "High-quality USB-C cable supporting 100W Power Delivery for fast charging of laptops and "
            "phones. Durable design with 10,000+ bend lifespan. USB 2.0 data transfer speeds. Excellent "
            "value for money with Anker's reliability."
        ),
        "images": ["https://example.com/anker-usbc.jpg"],
    },
    {
        "id": "USB002",
        "title": "Apple USB-C Charge Cable 2m - Premium Braided Design",
        "price": 29.00,
        "rating": 4.5,
        "num_ratings": 8932,
        "delivery_date": "2025-01-14",
        "description": (
            "Official Apple USB-C cable with woven design for durability. Supports fast charging for "
            "iPhone 15 and MacBook. Premium build quality but limited to 60W charging. More expensive "
            "than alternatives with similar specs."
        ),
        "images": ["https://example.com/apple-usbc.jpg"],
    },
    {
        "id": "USB003",
        "title": "Amazon Basics USB-C to USB-C 2.0 Cable 6ft - Value Pack",
        "price": 8.99,
        "rating": 4.4,
        "num_ratings": 67543,
        "delivery_date": "2025-01-10",
        "description": (
            "Budget-friendly USB-C cable for basic charging and data transfer. Supports up to 60W "
            "charging. Basic build quality, may not last as long as premium options. Great for everyday "
            "use but not for heavy-duty applications."
        ),
        "images": ["https://example.com/amazonbasics-usbc.jpg"],
    },
    {
        "id": "USB004",
        "title": "UGREEN USB C Cable 2M 100W PD Fast Charging - Braided Nylon",
        "price": 14.99,
        "rating": 4.8,
        "num_ratings": 23451,
        "delivery_date": "2025-01-11",
        "description": (
            "Premium braided nylon USB-C cable with 100W Power Delivery support. Aluminum alloy "
            "connectors resist corrosion. USB 2.0 speeds. Excellent durability with 25,000+ bend tests. "
            "Best value for money in the 2m category."
        ),
        "images": ["https://example.com/ugreen-usbc.jpg"],
    },
    {
        "id": "USB005",
        "title": "Cable Matters USB-C Cable 2m - USB 3.2 Gen 2 10Gbps Data Transfer",
        "price": 19.99,
        "rating": 4.6,
        "num_ratings": 5621,
        "delivery_date": "2025-01-12",
        "description": (
            "High-speed USB-C cable with 10Gbps data transfer and 100W charging. Ideal for transferring "
            "large files quickly. Supports 4K@60Hz video. More expensive but justified if you need fast "
            "data transfer speeds."
        ),
        "images": ["https://example.com/cablematters-usbc.jpg"],
    },
    {
        "id": "HP001",
        "title": "Sony WH-1000XM5 Wireless Noise Cancelling Headphones - Premium ANC",
        "price": 348.00,
        "rating": 4.8,
        "num_ratings": 12543,
        "delivery_date": "2025-01-13",
        "description": (
            "Industry-leading noise cancellation with Auto NC Optimizer. 30-hour battery life, "
            "multipoint connection, speak-to-chat technology. Ultra-comfortable design with soft-fit "
            "leather. Crystal clear hands-free calling with 8 microphones."
        ),
        "images": ["https://example.com/sony-xm5.jpg"],
    },
    {
        "id": "HP002",
        "title": "Apple AirPods Pro (2nd Gen) - Active Noise Cancellation",
        "price": 249.00,
        "rating": 4.7,
        "num_ratings": 89234,
        "delivery_date": "2025-01-11",
        "description": (
            "Apple's premium true wireless earbuds with H2 chip for breakthrough audio. Adaptive "
            "Transparency, Personalized Spatial Audio with dynamic head tracking. Up to 6 hours of "
            "listening time. MagSafe charging case with precision finding."
        ),
        "images": ["https://example.com/airpods-pro.jpg"],
    },
    {
        "id": "HP003",
        "title": "Bose QuietComfort Ultra Headphones - Spatial Audio",
        "price": 429.00,
        "rating": 4.6,
        "num_ratings": 5432,
        "delivery_date": "2025-01-14",
        "description": (
            "Bose's flagship headphones with world-class noise cancellation and Immersive Audio. "
            "CustomTune technology adapts sound to your ears. 24 hours of battery. Premium materials and "
            "exceptional comfort for all-day wear."
        ),
        "images": ["https://example.com/bose-qc-ultra.jpg"],
    },
    {
        "id": "LA001",
        "title": "Logitech MX Master 3S - Wireless Performance Mouse",
        "price": 99.99,
        "rating": 4.8,
        "num_ratings": 34521,
        "delivery_date": "2025-01-10",
        "description": (
            "Advanced wireless mouse with MagSpeed electromagnetic scrolling. 8K DPI optical sensor "
            "tracks on any surface including glass. Quiet clicks, ergonomic design. Connect up to 3 "
            "devices with Easy-Switch. USB-C quick charging."
        ),
        "images": ["https://example.com/mx-master-3s.jpg"],
    },
    {
        "id": "LA002",
        "title": "Keychron K3 Pro - 75% Low Profile Mechanical Keyboard",
        "price": 109.00,
        "rating": 4.7,
        "num_ratings": 8934,
        "delivery_date": "2025-01-12",
        "description": (
            "Ultra-slim wireless mechanical keyboard with hot-swappable low-profile Gateron switches. "
            "QMK/VIA support for full customization. RGB backlight, Mac and Windows compatible. "
            "Bluetooth 5.1 connects up to 3 devices. Aluminum frame."
        ),
        "images": ["https://example.com/keychron-k3-pro.jpg"],
    },
]


def _review(rating: int, comment: str, date: str) -> dict[str, Any]:
    return {"rating": rating, "comment": comment, "date": date}


REVIEWS: dict[str, list[dict[str, Any]]] = {
    "B08N5WRWNW": [
        _review(5, "Great smart speaker! Sound quality exceeded my expectations for the price. Alexa works flawlessly.", "2024-12-15"),
        _review(4, "Good value, but wish the bass was a bit stronger. Perfect for smart home control.", "2024-11-20"),
        _review(5, "Bought three for different rooms. The intercom feature between them is fantastic!", "2024-10-30"),
    ],
    "HB001": [
        _review(5, "Used these on a 2-week trek in Nepal. Excellent ankle support and waterproofing held up perfectly even in monsoon conditions.", "2024-11-20"),
        _review(5, "Best hiking boots I've owned. The grip on wet rocks is phenomenal.", "2024-10-15"),
        _review(4, "Great boots but took about 20 miles to break in. Worth the wait though.", "2024-09-08"),
    ],
    "HB002": [
        _review(5, "Comfortable right out of the box. Did a 50-mile trek with no blisters.", "2024-11-01"),
        _review(4, "Good value boots. Not as premium as Salomon but get the job done well.", "2024-10-22"),
        _review(5, "Third pair of Moabs I've bought. They never disappoint for day hikes and weekend trips.", "2024-09-30"),
    ],
    "HB003": [
        _review(5, "Summited Island Peak in these. Kept my feet warm at -30°C. Worth every penny for serious mountaineering.", "2024-10-05"),
        _review(5, "Professional grade boots. Crampon compatible and extremely durable. Used on multiple 6000m+ peaks.", "2024-08-12"),
        _review(4, "Excellent boots but very stiff. Only suitable for technical mountaineering, not regular hiking.", "2024-07-20"),
    ],
    "HB004": [
        _review(4, "Great starter boots for the price. Used them on several day hikes without issues.", "2024-11-10"),
        _review(3, "Decent for casual hiking but wouldn't trust them for serious trekking. You get what you pay for.", "2024-10-01"),
        _review(5, "Perfect for light trails and walks. Very comfortable for the price point.", "2024-09-15"),
    ],
    "USB001": [
        _review(5, "Anker quality as expected. Charges my MacBook Pro at full speed. Cable feels very durable.", "2024-11-25"),
        _review(5, "Best value USB-C cable on the market. Fast charging works perfectly.", "2024-11-15"),
        _review(4, "Solid cable. Only minor complaint is it's not quite as flexible as I'd like.", "2024-10-28"),
    ],
    "USB002": [
        _review(4, "Nice quality cable but overpriced compared to alternatives with same specs.", "2024-11-20"),
        _review(5, "Perfect for my iPhone 15 and iPad. The braided design looks premium.", "2024-10-30"),
        _review(3, "Good cable but not worth double the price of Anker for essentially same performance.", "2024-10-10"),
    ],
    "USB003": [
        _review(4, "Can't beat the price. Does basic charging fine. Not the most durable but good enough.", "2024-11-28"),
        _review(5, "Perfect for everyday use. At this price I can have one in every room.", "2024-11-05"),
        _review(3, "Cheap and works but connector feels loose after a few months. You get what you pay for.", "2024-09-20"),
    ],
    "USB004": [
        _review(5, "Outstanding cable! Braided design is super durable and the 100W charging is fast. Best value for money.", "2024-11-22"),
        _review(5, "Been using for 6 months daily, still perfect. The build quality is impressive for the price.", "2024-11-01"),
        _review(5, "Better than my Apple cable at half the price. Highly recommend.", "2024-10-18"),
    ],
    "USB005": [
        _review(5, "The data transfer speeds are incredible. Essential if you move large video files.", "2024-11-18"),
        _review(4, "Great cable for fast data transfer but pricey if you just need charging.", "2024-10-25"),
        _review(5, "USB 3.2 speeds are worth it for my workflow. Also charges fast.", "2024-09-28"),
    ],
    "HP001": [
        _review(5, "Best noise cancelling I've ever experienced. Perfect for flights and open offices.", "2024-12-01"),
        _review(5, "Sound quality is exceptional. The auto-pause when removing is so convenient.", "2024-11-15"),
        _review(4, "Amazing headphones but wish they folded flat like the XM4.", "2024-10-20"),
    ],
    "HP002": [
        _review(5, "Seamless with my Apple devices. The spatial audio is mind-blowing for movies.", "2024-12-05"),
        _review(4, "Great earbuds but battery life could be better. Still the best for iPhone users.", "2024-11-18"),
        _review(5, "Noise cancellation is perfect for commuting. Adaptive transparency is a game changer.", "2024-10-25"),
    ],
    "HP003": [
        _review(5, "The comfort is unmatched. I can wear these all day without any fatigue.", "2024-11-28"),
        _review(4, "Excellent sound and ANC but pricey. Worth it if comfort is your priority.", "2024-11-10"),
        _review(5, "Immersive Audio feature is incredible. Best for music enthusiasts.", "2024-10-15"),
    ],
    "LA001": [
        _review(5, "Best mouse I've ever used. The scroll wheel is addictive and the ergonomics are perfect.", "2024-12-03"),
        _review(5, "Quiet clicks are a blessing in meetings. Works flawlessly on any surface.", "2024-11-20"),
        _review(4, "Excellent mouse but expensive. The multi-device switching is worth it for my setup.", "2024-10-28"),
    ],
    "LA002": [
        _review(5, "Perfect for travel. Low profile feels great and the build quality is premium.", "2024-11-25"),
        _review(5, "Hot-swap switches are amazing. Customized with my favorite switches easily.", "2024-11-08"),
        _review(4, "Great keyboard but took some time to adjust from a full-size. Love the RGB.", "2024-10-15"),
    ],
}


class Catalog:
    """In-memory product catalog keyed by product id."""

    def __init__(
        self,
        products: Iterable[Mapping[str, Any]] = PRODUCTS,
        reviews: Mapping[str, list[Mapping[str, Any]]] = REVIEWS,
        aliases: Mapping[str, list[str]] = SEARCH_ALIASES,
    ) -> None:
        self._products = {str(item["id"]): dict(item) for item in products}
        self._reviews = {key: [dict(review) for review in value] for key, value in reviews.items()}
        self.aliases = dict(aliases)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def get(self, product_id: str) -> dict[str, Any] | None:
        product = self._products.get(product_id)
        return dict(product) if product is not None else None

    def products(self) -> list[dict[str, Any]]:
        """Return every product in catalog order."""

        return [dict(product) for product in self._products.values()]

    def reviews(self, product_id: str) -> list[dict[str, Any]] | None:
        reviews = self._reviews.get(product_id)
        return [dict(review) for review in reviews] if reviews is not None else None

    def expand_terms(self, search_term: str) -> list[str]:
        """Return the lowercased term followed by alias keywords it triggers."""

        lowered = search_term.lower()
        terms = [lowered]
        for key, aliases in self.aliases.items():
            if key in lowered:
                terms.extend(aliases)
        return list(dict.fromkeys(terms))
