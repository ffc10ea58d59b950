import sys

from bank import bank

raise SystemExit(bank.main(sys.argv[1:]))
