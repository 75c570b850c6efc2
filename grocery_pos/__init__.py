"""GroceryCo point-of-sale pricing engine."""
