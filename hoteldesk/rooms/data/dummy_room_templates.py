def _prices(day_use, stay, weekend_stay):
    prices = {}
    for key in ("monday", "tuesday", "wednesday", "thursday", "sunday"):
        prices[key] = {"stay_price": stay, "day_use_price": day_use}
    for key in ("friday", "saturday"):
        prices[key] = {"stay_price": weekend_stay, "day_use_price": day_use + 10000}
    return prices


room_templates = [
    {
        "room_type": "스탠다드",
        "image_url": "https://ifh.cc/g/XkyPzY.png",
        "inventory": 5,
        "prices": _prices(30000, 60000, 80000),
    },
    {
        "room_type": "디럭스",
        "image_url": "https://ifh.cc/g/vQHnA9.png",
        "inventory": 3,
        "prices": _prices(40000, 80000, 110000),
    },
    {
        "room_type": "스위트",
        "image_url": "https://ifh.cc/g/5oz2yQ.png",
        "inventory": 1,
        "discount_rate": 5,
        "prices": _prices(60000, 130000, 170000),
    },
]
