"""Templates for generated growthfit configuration files."""

DEFAULT_CONFIG = """# growthfit configuration
# CSV input: first column is the input size, second the measured value.
header: false
delimiter: ","

# Growth classes to rate (empty = every active class). Run `growthfit classes`
# for the list of keys.
classes: []
exclude_classes: []

# Rate classes on a thread pool (0 = sequential).
parallel_workers: 0

# Reports (paths relative to the working directory).
json_path: null
markdown_path: null

# Gating: exit with status 1 when the best score is below `fail_under`
# or the winning class differs from `expect`.
fail_under: null
expect: null
"""
