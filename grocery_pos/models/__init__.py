"""Data models for products, line items, promotions and sales."""
