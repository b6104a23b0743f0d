"""JSON web adapter for the loan payoff calculator."""
