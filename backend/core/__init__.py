"""Core shared logic for moving-average crossover signals.

This package contains pure business logic with no I/O dependencies
(no network or filesystem access). The live service in app/ feeds it
candles and prices through the collaborator protocols in
core.strategy.protocol.
"""
