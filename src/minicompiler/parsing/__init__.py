from .syntax_checker import SyntaxChecker, SyntaxResult, check_syntax

__all__ = ['SyntaxChecker', 'SyntaxResult', 'check_syntax']
