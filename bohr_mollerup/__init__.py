"""
bohr_mollerup — численное ядро визуализации теоремы Бора–Моллерупа.

- core.math: log|Γ| (Lanczos), численные safeguards, исключения
- core.domain: immutable Point и SqueezeResult
- core.contracts: JSON Schema контракт payload для слоя представления
- squeeze: ловушка из хорд и метрика сходимости gap
- narrative: пошаговая машина состояний изложения
"""

__version__ = "0.1.0"
