#!/usr/bin/env python3
"""
Terminal front end for the Starship Shop.

Browse the catalog, search, fill the cart and place orders that earn reward
credits. The balance is persisted between runs (see config/shop_config.yml).

  python scripts/run_shop.py            # SWAPI catalog
  python scripts/run_shop.py --local    # bundled catalog, no network
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from starship_shop.currency import format_price
from starship_shop.dependencies import build_state_manager
from starship_shop.integrations.contracts.interfaces import PaymentMethod
from starship_shop.shop.state_manager import ShopStateManager
from starship_shop.utils.config_loader import load_shop_config

# Commands that exit the shop
SHOP_EXIT = frozenset({"quit", "exit", "q", "bye"})

PAYMENT_ALIASES = {
    "card": PaymentMethod.CREDIT_CARD,
    "credit": PaymentMethod.CREDIT_CARD,
    "paypal": PaymentMethod.PAYPAL,
}

HELP = """Commands:
  list [page]         show a catalog page (default: current page)
  next | prev         move between catalog pages
  search <text>       search by name or model (empty text clears results)
  add <id>            add one unit to the cart
  remove <id>         remove one unit from the cart
  set <id> <n>        set the quantity of a cart line (0 removes it)
  cart                show the cart and order summary
  clear               empty the cart
  order [card|paypal] place the order and earn reward credits
  credits             show the reward balance
  help                show this help
  quit                leave the shop"""


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_items(items) -> None:
    if not items:
        print("(no starships)")
        return
    for view in items:
        cost = f"  [{view['cost_label']}]" if view["cost_label"] else ""
        in_cart = f"  x{view['quantity']} in cart" if view["quantity"] else ""
        print(f"  {view['id']:>6}  {view['name']:<34} {view['price_label']:>22}{cost}{in_cart}")


def print_catalog(shop: ShopStateManager) -> None:
    snap = shop.snapshot()["catalog"]
    if snap["error"]:
        print(f"Could not load catalog: {snap['error']['message']}")
        return
    print(f"\n### Catalog page {snap['current_page']} ({snap['count']} starships)\n")
    print_items(snap["items"])
    nav = []
    if snap["has_previous"]:
        nav.append("prev")
    if snap["has_more"]:
        nav.append("next")
    if nav:
        print(f"\n(more pages: {', '.join(nav)})")


def print_cart(shop: ShopStateManager) -> None:
    cart = shop.cart_snapshot()
    if not cart["lines"]:
        print("Your cart is empty. Add some starships to get started!")
        return
    print(f"\n### Cart ({len(cart['lines'])} items, {cart['total_quantity']} units)\n")
    for line in cart["lines"]:
        item = line["item"]
        print(f"  {item['id']:>6}  {item['name']:<34} {item['price_label']} each  x{line['quantity']}  = {line['subtotal_label']}")
    summary = shop.summary_snapshot()
    print()
    print(f"  Subtotal:        {summary['subtotal_label']}")
    print(f"  Tax ({summary['tax_rate']:.0%}):        {summary['tax_label']}")
    print(f"  Total:           {summary['total_label']}")
    print(f"  Points earned:   {summary['credits_earned']:,} credits")


def print_credits(shop: ShopStateManager) -> None:
    snap = shop.credits_snapshot()
    print(f"Reward balance: {snap['balance_label']}")
    if snap["error"]:
        print(f"(warning: {snap['error']['message']})")


async def handle_command(shop: ShopStateManager, line: str) -> None:
    parts = line.split()
    command, args = parts[0].lower(), parts[1:]

    if command == "help":
        print(HELP)
    elif command == "list":
        page = int(args[0]) if args and args[0].isdigit() else shop.catalog.current_page
        await shop.fetch_page(page)
        print_catalog(shop)
    elif command == "next":
        if shop.catalog.has_more:
            await shop.fetch_page(shop.catalog.current_page + 1)
        print_catalog(shop)
    elif command == "prev":
        if shop.catalog.has_previous:
            await shop.fetch_page(shop.catalog.current_page - 1)
        print_catalog(shop)
    elif command == "search":
        query = " ".join(args)
        if not await shop.search(query):
            print(f"(type at least {shop.search_min_length} characters to search)")
            return
        snap = shop.snapshot()["search"]
        if snap["error"]:
            print(f"Search failed: {snap['error']['message']}")
        elif query.strip():
            print(f"\n### Results for '{snap['query']}'\n")
            print_items(snap["results"])
    elif command in ("add", "remove", "set"):
        if not args or (command == "set" and (len(args) < 2 or not args[1].lstrip("-").isdigit())):
            print(f"Usage: {command} <id>" + (" <n>" if command == "set" else ""))
            return
        item_id = args[0]
        if command == "add":
            try:
                shop.add_to_cart(item_id)
            except KeyError:
                print(f"Unknown starship id '{item_id}'. List or search the catalog first.")
                return
            if shop.cart_error:
                print(shop.cart_error["message"])
                return
        elif command == "remove":
            shop.remove_from_cart(item_id)
        else:
            shop.set_quantity(item_id, int(args[1]))
        print(f"In cart: {shop.cart.quantity_of(item_id)} (total {format_price(shop.cart.total_price())})")
    elif command == "cart":
        print_cart(shop)
    elif command == "clear":
        shop.clear_cart()
        print("Cart cleared.")
    elif command == "order":
        method = PAYMENT_ALIASES.get(args[0].lower(), PaymentMethod.CREDIT_CARD) if args else PaymentMethod.CREDIT_CARD
        print("Processing...")
        receipt = await shop.place_order(payment_method=method)
        if receipt is None:
            if shop.checkout_error:
                print(f"Cart Empty: {shop.checkout_error['message']}")
            return
        print(f"\nOrder placed using {receipt.payment_method.value}.")
        print(f"Total: {format_price(receipt.total)}")
        print(f"You earned {receipt.credits_earned:,} credits!")
        if not receipt.persisted:
            print("(warning: the new balance could not be saved)")
        print("Thank you for shopping with Starship Shop!")
    elif command == "credits":
        print_credits(shop)
    else:
        print(f"Unknown command '{command}'. Type help for the list of commands.")


async def shop_loop(shop: ShopStateManager) -> None:
    await shop.start()
    print("Starship Shop. Type help for commands, quit to leave.\n")
    print_credits(shop)
    print_catalog(shop)
    while True:
        try:
            line = (await asyncio.to_thread(input, "\nshop> ")).strip()
        except EOFError:
            print("\nBye.")
            break
        if not line:
            continue
        if line.lower() in SHOP_EXIT:
            print("Bye.")
            break
        await handle_command(shop, line)


def main() -> int:
    parser = argparse.ArgumentParser(description="Browse starships, fill a cart and earn reward credits.")
    parser.add_argument("--config", type=Path, default=None, help="Path to shop_config.yml")
    parser.add_argument("--local", action="store_true", help="Use the bundled catalog instead of SWAPI")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    cfg = load_shop_config(args.config)
    if args.local:
        cfg.catalog.backend = "local"

    shop = build_state_manager(cfg)
    # Commands arrive one line at a time
    shop.cart_gate.min_interval_ms = 0
    shop.search_gate.min_interval_ms = 0

    try:
        asyncio.run(shop_loop(shop))
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
