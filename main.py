"""Run a program in a window: python main.py rom=path/to/game.ch8"""

from vipcore.cli import main

if __name__ == "__main__":
    main()
