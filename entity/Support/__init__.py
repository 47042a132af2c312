from .Arr import Arr
from .Cursor import Cursor
from .HigherOrderProxy import HigherOrderProxy, invoke, read
from .MacroRegistry import Macro, MacroRegistry, Macroable, macro_registry
from .ValueRetriever import use_as_callable, value_retriever

__all__ = [
    "Arr",
    "Cursor",
    "HigherOrderProxy",
    "invoke",
    "read",
    "Macro",
    "MacroRegistry",
    "Macroable",
    "macro_registry",
    "use_as_callable",
    "value_retriever"
]
