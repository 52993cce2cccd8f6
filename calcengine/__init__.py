"""calcengine - calculator expression engine.

Text expressions are tokenized, reordered with the Shunting Yard algorithm
and evaluated on a float stack. See calcengine.expression for the core and
calcengine.session for a stateful calculator with an angle mode.
"""

__version__ = "0.1.0"
