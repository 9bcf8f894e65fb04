"""
🧪 test_calculator.py — unit-тести для чистих функцій розрахунку

Перевіряє:
- Суму позиції, резервну ціну та доплати за опції
- Знижки fixed / percentage / free_shipping
- Податок за країною призначення та політику податкової бази
- Доставку, комісію оплати та повні підсумки
"""

from decimal import Decimal

import pytest

from storefront.domain.coupons import Coupon, DiscountType
from storefront.domain.pricing import (
    CountryRate,
    FeeType,
    LineItem,
    OrderTotals,
    PaymentMethod,
    ProductPriceFallback,
    SelectedOption,
    ShippingMethod,
    ShippingType,
    TaxBase,
    TaxRule,
    compute_discount,
    compute_line_total,
    compute_payment_fee,
    compute_shipping_cost,
    compute_subtotal,
    compute_tax,
    compute_totals,
)

D = Decimal


# ================================
# 🛒 compute_line_total
# ================================
def test_line_total_uses_cart_price_and_options():
    item = LineItem(
        product_id="p1",
        unit_price=D("10"),
        quantity=3,
        selected_options=(SelectedOption("Gift wrap", D("1.50")), SelectedOption("Engraving", "2")),
    )
    assert compute_line_total(item) == D("40.50")


def test_line_total_falls_back_to_catalog_price():
    item = LineItem(product_id="p1", unit_price=0, quantity=2)
    fallback = ProductPriceFallback(price=D("12"), compare_price=D("9"))
    assert compute_line_total(item, fallback) == D("18")


def test_compare_price_equal_to_price_is_ignored():
    fallback = ProductPriceFallback(price=D("12"), compare_price=D("12"))
    assert fallback.effective_price == D("12")


def test_compare_price_higher_than_price_keeps_price():
    fallback = ProductPriceFallback(price=D("12"), compare_price=D("20"))
    assert fallback.effective_price == D("12")


def test_cart_price_is_authoritative_over_fallback():
    item = LineItem(product_id="p1", unit_price=D("5"), quantity=1)
    assert compute_line_total(item, ProductPriceFallback(price=D("99"))) == D("5")


def test_line_total_without_price_or_fallback_is_zero():
    assert compute_line_total(LineItem(product_id="p1", unit_price=None, quantity=4)) == D("0")


def test_malformed_line_item_does_not_raise():
    item = LineItem(product_id="p1", unit_price=float("nan"), quantity="abc")
    result = compute_line_total(item)
    assert result == D("0")
    assert result.is_finite()


@pytest.mark.parametrize("quantity", [None, "", "abc", 0, -3, float("inf")])
def test_invalid_quantity_defaults_to_one(quantity):
    item = LineItem(product_id="p1", unit_price=D("7"), quantity=quantity)
    assert compute_line_total(item) == D("7")


def test_non_numeric_option_price_counts_as_zero():
    item = LineItem(
        product_id="p1",
        unit_price=D("10"),
        quantity=1,
        selected_options=(SelectedOption("Color", "red"), SelectedOption("Size", None)),
    )
    assert compute_line_total(item) == D("10")


def test_subtotal_of_empty_cart_is_zero():
    assert compute_subtotal([], {}) == D("0")


def test_subtotal_sums_lines_with_fallbacks():
    items = [
        LineItem(product_id="a", unit_price=D("10"), quantity=2),
        LineItem(product_id="b", unit_price=0, quantity=1),
    ]
    fallbacks = {"b": ProductPriceFallback(price=D("5.25"))}
    assert compute_subtotal(items, fallbacks) == D("25.25")


# ================================
# 🎟️ compute_discount
# ================================
def test_no_coupon_no_discount():
    assert compute_discount(D("20"), None) == D("0")


def test_percentage_discount():
    coupon = Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=10)
    assert compute_discount(D("20"), coupon) == D("2")


def test_percentage_discount_respects_cap():
    coupon = Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=50, max_discount_amount=D("15"))
    assert compute_discount(D("100"), coupon) == D("15")


def test_fixed_discount_capped_by_subtotal():
    coupon = Coupon(discount_type=DiscountType.FIXED, discount_value=50)
    assert compute_discount(D("20"), coupon) == D("20")


def test_percentage_over_hundred_capped_by_subtotal():
    coupon = Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=150)
    assert compute_discount(D("40"), coupon) == D("40")


def test_free_shipping_coupon_has_no_discount_amount():
    coupon = Coupon(discount_type=DiscountType.FREE_SHIPPING, discount_value=100)
    assert compute_discount(D("20"), coupon) == D("0")


def test_negative_discount_value_is_clamped():
    coupon = Coupon(discount_type=DiscountType.FIXED, discount_value=-5)
    assert compute_discount(D("20"), coupon) == D("0")


def test_fixed_discount_is_monotonic_until_subtotal():
    subtotal = D("30")
    previous = D("0")
    for value in range(0, 60, 5):
        current = compute_discount(subtotal, Coupon(discount_type=DiscountType.FIXED, discount_value=value))
        assert current >= previous
        assert current <= subtotal
        previous = current


# ================================
# 🧾 compute_tax
# ================================
def test_tax_uses_destination_country_rate():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    rules = [TaxRule(country_rates=(CountryRate("US", 8),))]
    assert compute_tax(items, {}, rules, "US", D("0")) == D("8")


def test_tax_zero_for_unlisted_country():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    rules = [TaxRule(country_rates=(CountryRate("US", 8),))]
    assert compute_tax(items, {}, rules, "DE", D("0")) == D("0")


def test_tax_zero_without_rules_or_items():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    assert compute_tax(items, {}, [], "US", D("0")) == D("0")
    assert compute_tax([], {}, [TaxRule(country_rates=(CountryRate("US", 8),))], "US", D("0")) == D("0")


def test_tax_follows_product_tax_rule():
    items = [
        LineItem(product_id="book", unit_price=D("50"), quantity=1),
        LineItem(product_id="shirt", unit_price=D("100"), quantity=1),
    ]
    fallbacks = {
        "book": ProductPriceFallback(price=D("50"), tax_id="reduced"),
        "shirt": ProductPriceFallback(price=D("100"), tax_id="standard"),
    }
    rules = [
        TaxRule(id="standard", country_rates=(CountryRate("NL", 21),), is_default=True),
        TaxRule(id="reduced", country_rates=(CountryRate("NL", 9),)),
    ]
    assert compute_tax(items, fallbacks, rules, "NL", D("0")) == D("25.5")


def test_unknown_tax_id_is_untaxed():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    fallbacks = {"p1": ProductPriceFallback(price=D("100"), tax_id="missing")}
    rules = [TaxRule(id="standard", country_rates=(CountryRate("US", 8),))]
    assert compute_tax(items, fallbacks, rules, "US", D("0")) == D("0")


def test_product_without_tax_id_uses_default_rule():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    rules = [
        TaxRule(id="a", country_rates=(CountryRate("US", 5),)),
        TaxRule(id="b", country_rates=(CountryRate("US", 7),), is_default=True),
    ]
    assert compute_tax(items, {}, rules, "US", D("0")) == D("7")


def test_pre_discount_tax_ignores_discount():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    rules = [TaxRule(country_rates=(CountryRate("US", 10),))]
    assert compute_tax(items, {}, rules, "US", D("20")) == D("10")


def test_post_discount_tax_prorates_discount():
    items = [
        LineItem(product_id="a", unit_price=D("75"), quantity=1),
        LineItem(product_id="b", unit_price=D("25"), quantity=1),
    ]
    rules = [TaxRule(country_rates=(CountryRate("US", 10),))]
    tax = compute_tax(items, {}, rules, "US", D("20"), TaxBase.POST_DISCOUNT)
    assert tax == D("8")


# ================================
# 🚚 compute_shipping_cost / 💳 compute_payment_fee
# ================================
FREE_OVER_20 = ShippingMethod(
    type=ShippingType.FREE_SHIPPING,
    flat_rate_cost=D("5"),
    free_shipping_min_order=D("20"),
)


@pytest.mark.parametrize(
    "subtotal,expected",
    [
        (D("20"), D("0")),
        (D("19.99"), D("5")),
        (D("250"), D("0")),
    ],
)
def test_free_shipping_threshold(subtotal, expected):
    assert compute_shipping_cost(FREE_OVER_20, subtotal) == expected


def test_flat_rate_shipping_and_missing_method():
    flat = ShippingMethod(type=ShippingType.FLAT_RATE, flat_rate_cost=D("7.5"))
    assert compute_shipping_cost(flat, D("1000")) == D("7.5")
    assert compute_shipping_cost(None, D("1000")) == D("0")


def test_percentage_payment_fee():
    method = PaymentMethod(fee_type=FeeType.PERCENTAGE, fee_amount=3)
    assert compute_payment_fee(method, D("100")) == D("3")


def test_fixed_payment_fee():
    method = PaymentMethod(fee_type=FeeType.FIXED, fee_amount=D("1.25"))
    assert compute_payment_fee(method, D("100")) == D("1.25")


@pytest.mark.parametrize(
    "method",
    [
        None,
        PaymentMethod(fee_type=FeeType.NONE, fee_amount=D("5")),
        PaymentMethod(fee_type=FeeType.FIXED, fee_amount=0),
        PaymentMethod(fee_type=FeeType.PERCENTAGE, fee_amount="n/a"),
    ],
)
def test_payment_fee_zero_cases(method):
    assert compute_payment_fee(method, D("100")) == D("0")


# ================================
# 📦 compute_totals
# ================================
def test_scenario_plain_cart(two_tens):
    totals = compute_totals(two_tens)
    assert totals.subtotal == D("20")
    assert totals.discount == D("0")
    assert totals.tax == D("0")
    assert totals.total == D("20")


def test_scenario_percentage_coupon(two_tens):
    coupon = Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=10)
    totals = compute_totals(two_tens, coupon=coupon)
    assert totals.discount == D("2")
    assert totals.total == D("18")


def test_scenario_fixed_coupon_over_subtotal(two_tens):
    coupon = Coupon(discount_type=DiscountType.FIXED, discount_value=50)
    totals = compute_totals(two_tens, coupon=coupon)
    assert totals.discount == D("20")
    assert totals.total == D("0")


def test_total_adds_shipping_fee_and_tax():
    items = [LineItem(product_id="p1", unit_price=D("100"), quantity=1)]
    totals = compute_totals(
        items,
        coupon=Coupon(discount_type=DiscountType.FIXED, discount_value=10),
        tax_rules=[TaxRule(country_rates=(CountryRate("US", 8),))],
        destination_country="US",
        shipping_method=ShippingMethod(type=ShippingType.FLAT_RATE, flat_rate_cost=D("5")),
        payment_method=PaymentMethod(fee_type=FeeType.PERCENTAGE, fee_amount=2),
    )
    assert totals == OrderTotals(
        subtotal=D("100"),
        discount=D("10"),
        tax=D("8"),
        shipping_cost=D("5"),
        payment_fee=D("2"),
        total=D("105"),
    )


def test_empty_cart_is_all_zero_regardless_of_inputs():
    totals = compute_totals(
        [],
        coupon=Coupon(discount_type=DiscountType.FIXED, discount_value=10),
        tax_rules=[TaxRule(country_rates=(CountryRate("US", 8),))],
        destination_country="US",
        shipping_method=ShippingMethod(type=ShippingType.FLAT_RATE, flat_rate_cost=D("5")),
        payment_method=PaymentMethod(fee_type=FeeType.FIXED, fee_amount=D("2")),
    )
    assert totals == OrderTotals()


def test_free_shipping_coupon_waives_shipping(two_tens):
    coupon = Coupon(discount_type=DiscountType.FREE_SHIPPING)
    flat = ShippingMethod(type=ShippingType.FLAT_RATE, flat_rate_cost=D("5"))
    assert compute_totals(two_tens, coupon=coupon, shipping_method=flat).shipping_cost == D("0")
    kept = compute_totals(
        two_tens,
        coupon=coupon,
        shipping_method=flat,
        free_shipping_coupon_waives_shipping=False,
    )
    assert kept.shipping_cost == D("5")
    assert kept.total == D("25")


def test_totals_are_idempotent(two_tens):
    kwargs = dict(
        coupon=Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=15),
        shipping_method=FREE_OVER_20,
    )
    assert compute_totals(two_tens, **kwargs) == compute_totals(two_tens, **kwargs)


def test_totals_with_garbage_inputs_stay_finite():
    items = [
        LineItem(product_id="p1", unit_price="oops", quantity="abc"),
        LineItem(product_id="p2", unit_price=float("inf"), quantity=None),
    ]
    totals = compute_totals(
        items,
        coupon=Coupon(discount_type=DiscountType.PERCENTAGE, discount_value=float("nan")),
        shipping_method=ShippingMethod(type=ShippingType.FLAT_RATE, flat_rate_cost="free?"),
        payment_method=PaymentMethod(fee_type=FeeType.FIXED, fee_amount=float("-inf")),
    )
    for value in totals.as_mapping().values():
        assert value.is_finite()
        assert value >= 0
    assert totals.total == D("0")


def test_rounded_totals_quantize_to_cents():
    items = [LineItem(product_id="p1", unit_price=D("10.005"), quantity=1)]
    totals = compute_totals(items).rounded()
    assert totals.subtotal == D("10.01")
    assert str(totals.discount) == "0.00"


# ================================
# 🛡️ Переповнення Decimal
# ================================
def test_line_total_overflow_becomes_zero():
    item = LineItem(product_id="p", unit_price="1e500000", quantity="1e500000")
    assert compute_line_total(item) == D("0")


def test_huge_percentage_coupon_does_not_raise(two_tens):
    coupon = Coupon(discount_type=DiscountType.PERCENTAGE, discount_value="1e999999")
    totals = compute_totals(two_tens, coupon=coupon)
    assert totals.subtotal == D("20")
    assert D("0") <= totals.discount <= totals.subtotal
    for value in totals.as_mapping().values():
        assert value.is_finite()


def test_huge_tax_rate_does_not_raise():
    items = [LineItem(product_id="p1", unit_price="9e999999", quantity=1)]
    rules = [TaxRule(country_rates=(CountryRate("US", "9e999999"),))]
    assert compute_tax(items, {}, rules, "US").is_finite()


def test_huge_cart_price_can_be_rounded_for_display():
    totals = compute_totals([LineItem(product_id="p", unit_price="1e30")])
    rounded = totals.rounded()
    assert rounded.subtotal == D("1e30")
    assert rounded.total == D("1e30")
    assert str(rounded.discount) == "0.00"


def test_product_record_without_tax_id_is_untaxed():
    items = [
        LineItem(product_id="gift-card", unit_price=D("50"), quantity=1),
        LineItem(product_id="unknown", unit_price=D("100"), quantity=1),
    ]
    fallbacks = {"gift-card": ProductPriceFallback(price=D("50"))}
    rules = [TaxRule(id="standard", country_rates=(CountryRate("US", 8),), is_default=True)]
    assert compute_tax(items, fallbacks, rules, "US") == D("8")


def test_fractional_quantity_is_truncated():
    item = LineItem(product_id="p1", unit_price=D("10"), quantity="2.5")
    assert compute_line_total(item) == D("20")
