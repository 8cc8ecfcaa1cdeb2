# main.py
import logging
import sys

import run_and_export
from maze_generator import DEFAULT_HEIGHT

MIN_SIZE = 3
MAX_SIZE = 501
TEXT_LIMIT = 41  # print the maze itself only when it fits a terminal

def build_and_visualize(size: int, seed=None):
    out, html_path = run_and_export.run_and_export(
        height=size, width=size, seed=seed, auto_open_html=False
    )
    if out["width"] <= TEXT_LIMIT:
        print(run_and_export.grid_to_text(out["grid"], out["results"]["A*"]["path"]))
    return html_path

if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # default size
    size = DEFAULT_HEIGHT

    if len(sys.argv) > 1:
        arg = sys.argv[1]
        try:
            val = int(arg)
            if MIN_SIZE <= val <= MAX_SIZE:
                size = val
            else:
                print(f"Invalid size '{arg}'. Must be an integer between {MIN_SIZE} and {MAX_SIZE}. Using default {size}.")
        except ValueError:
            print(f"Invalid argument '{arg}'. Must be an integer between {MIN_SIZE} and {MAX_SIZE}. Using default {size}.")

    print("Creating", f"{size}x{size}", "maze...")
    html = build_and_visualize(size)
    print(f"Done. HTML written to: {html}")
