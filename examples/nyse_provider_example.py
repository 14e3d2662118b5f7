"""
Example usage of NyseProvider and the symbol extractor.

This script fetches the NYSE trading units file and prints the first symbols
without downloading any logos.
"""
from logo_fetcher.providers import NyseProvider
from logo_fetcher.symbols import iter_symbols
from logo_fetcher.tsv import parse_table

provider = NyseProvider(timeout=60)

print(f"Fetching symbol table from {provider.url}...")
try:
    table = parse_table(provider.fetch_table_text())
except RuntimeError as e:
    print(f"Error fetching data: {e}")
    print("Note: This may fail in sandboxed environments without internet access.")
    raise SystemExit(1)

print(f"Columns: {table.headers}")
print(f"Rows: {len(table.rows)}")

idx = table.find_header("symbol")
if idx is None:
    print("No symbol column found")
    raise SystemExit(1)

symbols = list(iter_symbols(table, idx))
print(f"Valid symbols: {len(symbols)}")
print(f"First 10: {symbols[:10]}")
