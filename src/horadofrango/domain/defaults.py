"""Seed data and fixed business constants."""

from decimal import Decimal

from horadofrango.domain.entities import Bank, Category

# Unpaid fiados older than this many days are overdue everywhere.
OVERDUE_DAYS = 30

# Income synthesized from fiado payments is filed under this category.
SALE_CATEGORY_ID = "c1"

# Unit sales count categories whose name contains this word; "Frango" is seeded.
PRODUCT_KEYWORD = "frango"

DEFAULT_BANKS: tuple[Bank, ...] = (
    Bank(id="1", name="Banco do Brasil", color="#F7A823", initial_balance=Decimal("0")),
    Bank(id="2", name="Nubank", color="#8A05BE", initial_balance=Decimal("0")),
    Bank(id="3", name="Dinheiro", color="#4CAF50", initial_balance=Decimal("0")),
    Bank(id="4", name="Caixa", color="#1A75CF", initial_balance=Decimal("0")),
    Bank(id="5", name="Santander", color="#EC0000", initial_balance=Decimal("0")),
    Bank(id="6", name="Bradesco", color="#FF4B4B", initial_balance=Decimal("0")),
    Bank(id="7", name="Itaú", color="#FF7000", initial_balance=Decimal("0")),
)

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="c1", name="Venda"),
    Category(id="c2", name="Salário"),
    Category(id="c3", name="Aluguel"),
    Category(id="c4", name="Fornecedor"),
    Category(id="c5", name="Empresa"),
    Category(id="c6", name="Colaborador"),
    Category(id="c7", name="Casa"),
    Category(id="c8", name="Carro"),
    Category(id="c9", name="Frango"),
)
