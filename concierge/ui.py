"""Plain-text rendering for shop results, agent replies and shell chrome."""

from __future__ import annotations

import re
import textwrap
from datetime import date
from typing import Iterable, Literal, Sequence

from concierge.shop.models import CartItem, Order, ProductDetails, ProductReview, ProductSummary

MessageKind = Literal["success", "error", "warning", "info"]

WIDTH = 56

ICONS = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
    "info": "ℹ",
    "cart": "🛒",
    "heart": "♥",
    "star": "★",
    "star_empty": "☆",
    "package": "📦",
    "truck": "🚚",
    "search": "🔍",
    "bullet": "•",
    "arrow": "→",
    "sparkle": "✨",
    "clock": "⏰",
}


def format_price(price: float) -> str:
    return f"${price:,.2f}"


def format_date(value: str) -> str:
    """Render an ISO date as ``Wed, Jan 15``; unparseable values pass through."""

    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed:%a}, {parsed:%b} {parsed.day}"


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def divider(title: str | None = None) -> str:
    if not title:
        return "─" * WIDTH
    padded = f" {title} "
    remaining = max(0, WIDTH - len(padded))
    left = remaining // 2
    return "─" * left + padded + "─" * (remaining - left)


def render_stars(rating: float, max_stars: int = 5) -> str:
    full = int(rating)
    half = rating % 1 >= 0.5
    empty = max(0, max_stars - full - (1 if half else 0))
    stars = ICONS["star"] * (full + (1 if half else 0)) + ICONS["star_empty"] * empty
    return f"{stars} ({rating:.1f})"


def format_markdown(text: str) -> str:
    """Flatten the light markdown planners tend to emit."""

    result = re.sub(r"\*\*([^*]+)\*\*", r"\1", text)
    result = re.sub(r"`([^`]+)`", r"\1", result)
    result = re.sub(r"^#{1,3} (.+)$", r"\1", result, flags=re.MULTILINE)
    result = re.sub(r"^[-*] ", f"  {ICONS['bullet']} ", result, flags=re.MULTILINE)
    result = re.sub(r"^---$", "─" * 50, result, flags=re.MULTILINE)
    return re.sub(r"\n{3,}", "\n\n", result)


def message_box(message: str, kind: MessageKind = "info") -> str:
    return f"\n{ICONS[kind]} {format_markdown(message)}\n"


def product_card(product: ProductSummary) -> str:
    inner = WIDTH - 2
    lines = [
        "╭" + "─" * WIDTH + "╮",
        f"│ {truncate(product.title, inner - 2):<{inner}} │",
        f"│ {'ID: ' + product.id:<{inner}} │",
    ]
    price_line = (
        f"{format_price(product.price)}  {render_stars(product.rating)} "
        f"({product.num_ratings:,} reviews)"
    )
    lines.append(f"│ {price_line:<{inner}} │")
    if product.delivery_date:
        delivery = f"Delivery: {format_date(product.delivery_date)}"
        lines.append(f"│ {delivery:<{inner}} │")

    badges = []
    if product.in_cart:
        badges.append(f"{ICONS['cart']} In Cart")
    if product.in_wishlist:
        badges.append(f"{ICONS['heart']} Saved")
    if badges:
        lines.append(f"│ {'  '.join(badges):<{inner}} │")
    lines.append("╰" + "─" * WIDTH + "╯")
    return "\n".join(lines)


def product_list(title: str, products: Sequence[ProductSummary]) -> str:
    output = f"\n{divider(title)}\n\n"
    for product in products:
        output += product_card(product) + "\n"
    return output


def product_details(product: ProductDetails) -> str:
    description = textwrap.fill(product.description, width=60)
    output = f"\n{divider(ICONS['package'] + ' Product Details')}\n\n"
    output += product_card(product) + "\n"
    output += "\n  Description:\n"
    output += textwrap.indent(description, "  ") + "\n"
    return output


def format_review(review: ProductReview) -> str:
    return f'  {render_stars(review.rating)} {format_date(review.date)}\n  "{review.comment}"'


def reviews_summary(reviews: Iterable[ProductReview]) -> str:
    output = f"\n{divider(ICONS['star'] + ' Customer Reviews')}\n\n"
    for review in reviews:
        output += format_review(review) + "\n\n"
    return output


def cart_summary(items: Sequence[CartItem], total: float) -> str:
    lines = ["", divider(f"{ICONS['cart']} Shopping Cart"), ""]
    if not items:
        lines.append("  Your cart is empty")
    else:
        for item in items:
            lines.append(f"  {ICONS['bullet']} {truncate(item.title, 40)}")
            lines.append(f"    Qty: {item.quantity}  {format_price(item.subtotal)}")
        lines.extend(["", divider(), f"  Total: {format_price(total)}"])
    lines.append("")
    return "\n".join(lines)


def comparison_table(products: Sequence[ProductDetails]) -> str:
    lines = ["", divider(f"{ICONS['search']} Product Comparison"), ""]
    for number, product in enumerate(products, start=1):
        lines.append(f"[{number}] {truncate(product.title, 53)}")
        lines.append(f"    {format_price(product.price)}  {render_stars(product.rating)}")
        lines.append(f"    {product.description[:100]}")
        lines.append("")
    return "\n".join(lines)


def wishlist_summary(products: Sequence[ProductDetails]) -> str:
    if not products:
        return message_box(f"{ICONS['heart']} Your wishlist is empty. Save items you like for later!", "info")
    return product_list(f"{ICONS['heart']} Your Wishlist ({len(products)} items)", products)


def order_confirmation(order: Order) -> str:
    lines = [
        "",
        "  ╔═══════════════════════════════════════════╗",
        f"  ║         {ICONS['success']} ORDER CONFIRMED!                 ║",
        "  ╚═══════════════════════════════════════════╝",
        "",
        f"  Order ID: {order.order_id}",
        "",
    ]
    for item in order.items:
        lines.append(f"  {ICONS['package']} {truncate(item.title, 43)}")
        lines.append(f"    Qty: {item.quantity} × {format_price(item.price)}")
    lines.extend(["", divider(), f"  Total Paid: {format_price(order.total)}"])
    if order.estimated_delivery:
        lines.append(f"  {ICONS['truck']} Estimated Delivery: {format_date(order.estimated_delivery)}")
    lines.extend(["", f"  Thank you for your purchase! {ICONS['sparkle']}", ""])
    return "\n".join(lines)


def orders_summary(orders: Sequence[Order]) -> str:
    if not orders:
        return message_box(f"{ICONS['package']} No orders yet. Start shopping!", "info")

    output = f"\n{divider(ICONS['package'] + ' Order History')}\n\n"
    for order in orders:
        status_icon = {
            "delivered": ICONS["success"],
            "shipped": ICONS["truck"],
        }.get(order.status, ICONS["clock"])
        output += f"  Order {order.order_id}\n"
        output += f"  {status_icon} {order.status.upper()} {ICONS['bullet']} {format_date(order.order_date)}\n"
        for item in order.items:
            output += f"    {ICONS['bullet']} {truncate(item.title, 43)}\n"
        output += f"  Total: {format_price(order.total)}\n\n"
    return output


def final_response(message: str, tool_outputs: Sequence[str]) -> str:
    """Join this turn's tool outputs with the agent's closing message."""

    output = "\n".join(tool_outputs)
    if message:
        output += f"\n{format_markdown(message)}\n"
    return output


HELP_EXAMPLES = [
    ("Search products", '"Find hiking boots under $200"'),
    ("Get details", '"Tell me more about product HB001"'),
    ("Read reviews", '"Show reviews for HB001"'),
    ("Add to cart", '"Add USB001 to my cart"'),
    ("View cart", '"cart"'),
    ("Add to wishlist", '"Save HP002 for later"'),
    ("View wishlist", '"wishlist"'),
    ("Compare products", '"Compare HB001 and HB002"'),
    ("Purchase", '"Buy product USB001"'),
    ("View orders", '"orders"'),
    ("Filter", '"Find cables under $15 with 4+ stars"'),
    ("Start over", '"reset"'),
]


def help_menu() -> str:
    lines = ["", divider("Help & Commands"), "", "  Example Commands:", ""]
    for action, example in HELP_EXAMPLES:
        lines.append(f"  {ICONS['arrow']} {action}")
        lines.append(f"    {example}")
    lines.extend(["", '  Type "exit" or "quit" to end your session', ""])
    return "\n".join(lines)


def welcome_banner(app_name: str = "Shopping Concierge") -> str:
    lines = [
        "",
        "    ╔═══════════════════════════════════════════════════════╗",
        f"    ║   🛍️  {app_name:<48}║",
        "    ║   Your AI-powered personal shopping assistant         ║",
        "    ╚═══════════════════════════════════════════════════════╝",
        "",
        f"  {ICONS['sparkle']} Welcome! I can help you:",
        "",
        f"     {ICONS['search']}  Search and discover products",
        f"     {ICONS['star']}  Read reviews and compare options",
        f"     {ICONS['cart']}  Manage your shopping cart",
        f"     {ICONS['heart']}  Save items to your wishlist",
        f"     {ICONS['package']}  Complete purchases",
        "",
        '  Type "help" for commands or just ask naturally!',
        "",
    ]
    return "\n".join(lines)


def farewell() -> str:
    return "\n".join(
        [
            "",
            divider(),
            "",
            f"  {ICONS['sparkle']} Thank you for shopping with us!",
            "  Have a great day! See you next time.",
            "",
            divider(),
            "",
        ]
    )


def loading_message(message: str = "Processing") -> str:
    return f"\n⏳ {message}...\n"
