import argparse


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Paints dragon and Koch curves.", formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--settings", type=str, metavar="PATH", help="Path to settings file.", default="./saves/settings.yaml"
    )
    parser.add_argument(
        "--seed", type=int, metavar="INT", help="Seed for dragon settings and coin flips.", default=None
    )
    return parser.parse_args(argv)
