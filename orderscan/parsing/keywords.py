"""Keyword tables for receipt line classification.

All entries are already folded with :func:`orderscan.parsing.normalize.fold_turkish`
and are matched as substrings of folded lines.
"""

# Lines containing these are labels or totals, never names or address tails.
STOPWORDS: tuple[str, ...] = (
    "toplam",
    "total",
    "tutar",
    "ara toplam",
    "musteri",
    "telefon",
    "tel",
    "adres",
    "not",
    "note",
    "teslimat",
    "odeme",
)

ITEM_STOPWORDS: tuple[str, ...] = (
    "toplam",
    "total",
    "tutar",
    "adres",
    "telefon",
    "tel",
    "musteri",
    "not",
    "teslimat",
)

NAME_LABELS: tuple[str, ...] = (
    "musteri",
    "isim",
    "ad soyad",
    "ad:",
    "name",
    "customer",
)

SUBTOTAL_KEYWORDS: tuple[str, ...] = ("ara toplam", "aratoplam", "subtotal")

DISCOUNT_KEYWORDS: tuple[str, ...] = ("indirim", "kampanya", "kupon")

PAYABLE_KEYWORDS: tuple[str, ...] = (
    "indirimli",
    "odenecek",
    "tahsil",
    "net",
    "fatura",
    "fis",
    "odeme",
)

FINAL_KEYWORDS: tuple[str, ...] = PAYABLE_KEYWORDS + (
    "genel toplam",
    "toplam",
    "total",
    "tutar",
)
