"""Example usage of jsonmatch comparison engine."""

from jsonmatch import JsonMatchEngine, Difference, console_options

# Actual response from the service under test
actual = b"""
{
    "id": "inv-1001",
    "total": 125.50,
    "status": "paid",
    "updatedAt": "2025-02-02T10:30:00Z",
    "requestId": "4f9c2e",
    "metadata": "{\\"source\\": \\"billing\\", \\"retries\\": 0, \\"region\\": \\"eu\\"}",
    "lineItems": [
        {"sku": "A-1", "quantity": 2, "unitPrice": 50.00},
        {"sku": "B-7", "quantity": 1, "unitPrice": 25.50},
        {"sku": "C-3", "quantity": 1, "unitPrice": 0}
    ],
    "discounts": null
}
"""

# What the test expects to find in it
expected = b"""
{
    "id": "inv-1001",
    "total": 125.5,
    "status": "paid",
    "updatedAt": "2025-01-01T00:00:00Z",
    "requestId": "ignored-anyway",
    "metadata": "{\\"retries\\": 0, \\"source\\": \\"billing\\"}",
    "lineItems": [
        {"sku": "A-1", "quantity": 2, "unitPrice": 50.00},
        {"sku": "B-7", "quantity": 1, "unitPrice": 25.50}
    ],
    "discounts": []
}
"""

options = console_options()
options.ignore_fields = frozenset({"updatedAt"})
options.fuzzy_fields = frozenset({"requestId"})
options.string_as_map_fields = frozenset({"metadata"})
options.null_as_empty = True

engine = JsonMatchEngine(options)
result, message = engine.compare(actual, expected)

print("=" * 60)
print("JSONMATCH COMPARISON RESULT")
print("=" * 60)
print(f"\nResult: {result.name}")
print(f"Acceptable: {result.is_match}")

if message:
    print("\nDifferences:")
    print(message)

# "total" differs only in its literal (125.50 vs 125.5), which is a real
# mismatch; drop it and the remaining differences are extra data only.
print("\n" + "=" * 60)
print("WITHOUT THE TOTAL LITERAL")
print("=" * 60)
options.ignore_fields = options.ignore_fields | {"total"}
result, message = JsonMatchEngine(options).compare(actual, expected)
print(f"\nResult: {result.name}")
assert result == Difference.SUPERSET_MATCH
print(message)
