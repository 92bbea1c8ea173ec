"""
Pagination Context

Responsibilities:
- Converts printed page geometry into preview pixels
- Predicts page break offsets from total content height (simple mode)
- Greedily packs whole sections onto pages with advisory warnings (section-aware mode)
- Schedules re-estimation for an interactive preview, discarding stale results

Owns: Page geometry, height providers, page groupings
Never: Splits a section, or affects the exported document
"""
