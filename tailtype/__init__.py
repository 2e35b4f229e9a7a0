"""
Static type inference for the expressions of a log-tailing metrics language.
"""
