from typing import Annotated

from cyclopts import Parameter

from . import app


@app.default
def run(*tokens: Annotated[str, Parameter(allow_leading_hyphen=True)]) -> None:
    """Compile a Python script in memory and run its entry point.

    Args:
        tokens: Switches (//Ref:<name>, //EntryPoint:<Class>.<Method>, \
            //WarningLevel:<val>, //NoWarningsAsErrors, //NoPartialMatchWarning, \
            //Verbose), then the script filename and the script arguments
    """
    from pathlib import Path
    from sys import exit as sys_exit

    from ..configuring.settings import GlobalSettings
    from ..exceptions import PyrunError
    from ..running import run as running_run
    from ..utils import print_plain

    try:
        running_run(tokens, settings=GlobalSettings.from_yaml(Path()))
    except PyrunError as e:
        print_plain(str(e))
        sys_exit(1)
