"""
Lineage Statistics Package
--------------------------

The statistics engine and its tag substitution.

Modules:
    - dates: GEDCOM date parsing, Julian days, ages and centuries
    - visibility: Viewer context and record visibility gates
    - queries: Tree-scoped aggregation queries
    - charts: Chart series scaling, encoding and sinks
    - formatting: Locale-aware numbers, percentages and translation
    - renderer: Jinja2 fragments and output shapes
    - arguments: Lenient positional tag arguments
    - config: Engine defaults loaded from YAML
    - facade: The Stats facade
    - registry: The pinned tag whitelist
    - interpreter: The ``#tag:args#`` macro interpreter

Submodules are imported explicitly; this package does not import the
facade eagerly because the database models depend on ``dates``.
"""
