"""Allow `python -m bitscope`."""

from bitscope.run import main

main()
