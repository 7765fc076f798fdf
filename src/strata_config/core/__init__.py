# src/strata_config/core/__init__.py
"""
Core do Strata Config.

Componentes principais:
    - config → resolução de configuração em camadas
    - errors → payloads canônicos de diagnóstico

O core é síncrono e executado uma única vez na inicialização do processo,
antes de qualquer thread de trabalho.
"""
