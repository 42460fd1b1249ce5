from __future__ import annotations

from phat_benchmark.cli import main


if __name__ == "__main__":
    main()
