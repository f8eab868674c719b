"""Exceptions raised by the interpreter and its host layers."""


class VipcoreError(Exception):
    """Base for all vipcore errors."""
    pass


class ConfigurationError(VipcoreError, ValueError):
    """Raised when a machine or host cannot be set up as requested."""
    pass


class MachineFault(VipcoreError):
    """Fatal condition hit while executing a program.

    Faults never leave :meth:`Interpreter.step`; they are turned into a
    ``False`` return and the machine stays halted.
    """
    pass


class StackOverflow(MachineFault):
    def __init__(self, message: str = ""):
        super().__init__(message or "Call stack overflow")


class StackUnderflow(MachineFault):
    def __init__(self, message: str = ""):
        super().__init__(message or "Return with empty call stack")


class UnknownInstruction(MachineFault):
    def __init__(self, instruction: int):
        self.instruction = instruction
        super().__init__(f"Unknown instruction {instruction:#06x}")


class MemoryFault(MachineFault):
    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(f"Memory access out of range at {address:#06x} (+{length})")
