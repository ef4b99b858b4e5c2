"""Plugin implementations (storage backends)."""
