"""
Settings model for the sdb debugger front-end.

Holds the live values of every configuration element. The declaration
order of the fields below is the order in which elements are listed and
written to the configuration file.
"""

from dataclasses import dataclass


@dataclass
class Settings:
    """
    Current debugger configuration.

    One instance is created at startup and mutated in place afterwards,
    so anything holding a reference always sees the current values.
    Field defaults are the values restored by ``config reset``.
    """

    # Expression evaluation
    allow_method_evaluation: bool = True
    allow_target_invoke: bool = True
    allow_to_string_calls: bool = True
    evaluation_timeout: int = 1000  # milliseconds
    member_evaluation_timeout: int = 5000  # milliseconds

    # Value display
    chunk_raw_strings: bool = False
    disable_colors: bool = False
    ellipsize_strings: bool = True
    ellipsize_threshold: int = 100
    flatten_hierarchy: bool = True
    hexadecimal_integers: bool = False
    input_prompt: str = "(sdb) "

    # Connecting to a remote debuggee
    connection_attempt_interval: int = 500  # milliseconds
    max_connection_attempts: int = 1

    # Breakpoint/watch database
    default_database_file: str = ""
    load_database_automatically: bool = False
    save_database_automatically: bool = False

    # Runtime and stepping
    runtime_prefix: str = "/usr"
    enable_control_c: bool = True
    step_over_properties_and_operators: bool = True

    # Diagnostics
    debug_logging: bool = False
    log_internal_errors: bool = True
