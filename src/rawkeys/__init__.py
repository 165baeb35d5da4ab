"""rawkeys -- raw-mode terminal keystroke inspector.

Switches the controlling terminal into raw input mode, reports every
byte typed as its decimal code (and the character itself when it is
printable), and puts the terminal back exactly as it found it when the
user types ``q`` or anything goes wrong.
"""

__version__ = "0.1.0"
