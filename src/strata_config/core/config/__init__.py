# src/strata_config/core/config/__init__.py

"""
Camada de configuração do Strata Config.

Este pacote contém as estruturas e utilitários responsáveis por localizar
documentos, mesclar camadas, resolver caminhos de campo, converter tipos
e derivar campos de runtime.

A resolução de configuração no Strata Config é:
    - declarativa (registry de chave → campo)
    - ordenada (default → profile → ambiente)
    - tipada (coerção guiada pela anotação do campo)
    - fail-fast (nenhuma falha é tratada com retry)

Módulos:
    - store     → DocumentStore (YAML/JSON, caminhos de busca, ambiente)
    - registry  → FieldMap e conjunto base de chaves
    - paths     → FieldPathResolver (FieldHandle)
    - coercion  → TypeCoercer (FieldKind)
    - merge     → merge por camada (Layer)
    - runtime   → campos derivados (work_path, host, log_path)
    - loader    → fill_configuration / load_configuration

Limites explícitos:
    - Não valida faixas de negócio
    - Não suporta listas, hot-reload ou fontes remotas
"""
