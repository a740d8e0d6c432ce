"""Performance runner: program reports, result formatting, GitHub posting and the command."""