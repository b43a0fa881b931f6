import argparse
import asyncio
import logging
import random
import sys
from collections.abc import Callable

from colorama import Back, Fore, Style, just_fix_windows_console

from feedascii.converter import image_to_ascii
from feedascii.errors import FeedAsciiError, UsageError
from feedascii.feed import BASE_URL, FEED_PREFIX, make_client, random_post
from feedascii.loader import load_image
from feedascii.log import setup_logging
from feedascii.model import PERIODS, Listing, RenderConfig
from feedascii.terminal import get_terminal_size

log = logging.getLogger(__name__)

HELP_WORDS = ("?", "help", "man", "woman")

USAGE = f"""
    {Fore.GREEN}usage:{Style.RESET_ALL}

      feedascii <subreddit>

      parameters:

      {Fore.BLUE}-hot{Style.RESET_ALL}            random post in hot category
      {Fore.BLUE}-new{Style.RESET_ALL}            random post in new category
      {Fore.BLUE}-top{Style.RESET_ALL} [options]  random post in top category
                      {Fore.YELLOW}options:{Style.RESET_ALL} {", ".join(PERIODS)}
                      {Fore.YELLOW}default:{Style.RESET_ALL} hot
      {Fore.BLUE}-simple{Style.RESET_ALL}         use simple character matching
      {Fore.BLUE}-invert{Style.RESET_ALL}         invert the character palette
      {Fore.BLUE}-verbose{Style.RESET_ALL}        log progress to stderr
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


class _TopAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        namespace.category = "top"
        namespace.period = values


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="feedascii", add_help=False, allow_abbrev=False)
    parser.add_argument("name")
    parser.add_argument("-hot", dest="category", action="store_const", const="hot")
    parser.add_argument("-new", dest="category", action="store_const", const="new")
    parser.add_argument("-top", action=_TopAction, nargs="?", default=None, dest="period")
    parser.add_argument("-simple", action="store_true", default=False)
    parser.add_argument("-invert", action="store_true", default=False)
    parser.add_argument("-verbose", action="store_true", default=False)
    parser.set_defaults(category=None)
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse the command line; unknown flags and stray words are ignored."""
    if not argv or argv[0].startswith("-"):
        raise UsageError("Missing subreddit name, see 'feedascii help'")
    args, unknown = build_parser().parse_known_args(argv)
    args.unknown = unknown
    args.listing = Listing.resolve(args.category, args.period)
    args.config = RenderConfig(simple=args.simple, invert=args.invert)
    return args


def format_header(name: str, title: str) -> str:
    label = f"{Back.BLUE}{Fore.BLACK}{FEED_PREFIX}/{name}{Style.RESET_ALL}"
    return f"{label} {Fore.BLUE}{title}{Style.RESET_ALL}"


async def render_post(
    name: str,
    listing: Listing,
    config: RenderConfig,
    size: tuple[int, int],
    choose: Callable[[int], int] = random.randrange,
    base_url: str = BASE_URL,
    **client_kwargs,
) -> str:
    """Fetch a random post from a feed and return its header and artwork."""
    width, height = size
    async with make_client(**client_kwargs) as client:
        post = await random_post(name, listing, client, choose=choose, base_url=base_url)
        log.info("Rendering %r from %s at %dx%d", post.title, post.image_source, width, height)
        image = await load_image(post.image_source, client)
    art = image_to_ascii(image, width, height, config)
    return f"{format_header(name, post.title)}\n{art}"


def main(argv: list[str] | None = None):
    if argv is None:
        argv = sys.argv[1:]
    just_fix_windows_console()

    if argv and argv[0] in HELP_WORDS:
        print(USAGE)
        sys.exit(1)

    try:
        args = parse_args(argv)
        setup_logging(debug=args.verbose)
        if args.unknown:
            log.debug("Ignoring arguments: %s", " ".join(args.unknown))
        output = asyncio.run(render_post(args.name, args.listing, args.config, get_terminal_size()))
    except FeedAsciiError as e:
        print(f"{Fore.RED}{e}{Style.RESET_ALL}", file=sys.stderr)
        sys.exit(1)

    print(output)
