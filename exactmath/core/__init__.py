"""
Core math primitives, domain value types, and invariants.

Модуль не зависит от внешних систем: все операции чистые и синхронные.
"""
