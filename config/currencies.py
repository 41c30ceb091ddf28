"""Currency symbol/code lookup used by the price normalizers."""

# Symbol or ISO code -> ISO code
CURRENCY_MAP: dict[str, str] = {
    "€": "EUR",
    "EUR": "EUR",
    "CHF": "CHF",
    "$": "USD",
    "USD": "USD",
    "£": "GBP",
    "GBP": "GBP",
}
