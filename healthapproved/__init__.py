"""
Health Approved backend package.

Packaged-food lookup: resolves a barcode to a product and scores it against
the additive knowledge base.
"""
