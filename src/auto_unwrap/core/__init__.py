"""
Core Package.

Contains the rewrite logic:
- Token tree model and Rust lexer
- Skip directive detection
- Recursive rewrite engine and item entry adapter
- Trace logging and the engine facade
"""
