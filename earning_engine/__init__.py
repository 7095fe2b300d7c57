"""Ultra Earning Engine backend API."""
