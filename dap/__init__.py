"""
Dutch Auction Pricing (DAP)

Pricing core for signed, time-decaying trade intents:
- Linear and piecewise-linear (curve) decay
- Bounded / saturating uint256 arithmetic
- Exclusivity windows with override premiums
- Priority-fee based price scaling
- Cosigner-authenticated auction parameter overrides
"""
