import argparse
import random
import sys

from .config import CPU_HZ, SCALE
from .display import to_text
from .errors import Chip8Error
from .log import setup_logging
from .rom import load_rom
from .timing import Chip8


def non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError("must be >= 0, got %d" % value)
    return value


def seeded_random_byte(seed):
    rng = random.Random(seed)

    def random_byte():
        return rng.getrandbits(8)
    return random_byte


def build_parser():
    parser = argparse.ArgumentParser(prog="pychip8", description="CHIP-8 emulator")
    parser.add_argument("rom", help="raw CHIP-8 program image")
    parser.add_argument("--hz", type=non_negative_int, default=CPU_HZ,
                        help="cycle rate cap, 0 for uncapped (default: %(default)s)")
    parser.add_argument("--scale", type=int, default=SCALE,
                        help="window pixels per CHIP-8 pixel (default: %(default)s)")
    parser.add_argument("--headless", action="store_true",
                        help="no window: run --cycles cycles and print the screen")
    parser.add_argument("--cycles", type=int, default=1000,
                        help="cycles to run in headless mode (default: %(default)s)")
    parser.add_argument("--seed", type=int, help="seed the random source for Cxnn")
    parser.add_argument("--debug", action="store_true", help="trace every instruction")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    random_byte = None
    if args.seed is not None:
        random_byte = seeded_random_byte(args.seed)

    try:
        machine = Chip8(load_rom(args.rom), hz=args.hz or None, random_byte=random_byte)
    except (OSError, Chip8Error) as e:
        print("Could not load ROM:", e, file=sys.stderr)
        return 1

    if args.headless:
        try:
            machine.run(cycles=args.cycles)
        except Chip8Error as e:
            print("Emulation stopped:", e, file=sys.stderr)
            return 1
        finally:
            print(to_text(machine.state.display))
        return 0

    from .window import run_window
    run_window(machine, args.scale)
    return 1 if machine.halted else 0


if __name__ == "__main__":
    sys.exit(main())
