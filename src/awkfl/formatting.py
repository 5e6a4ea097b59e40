## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Cell, AwkArray


def _format_key(key) -> str:
    return str(key) if isinstance(key, int) else '"' + key.replace('"', '\\"') + '"'

def format_cell(cell: Cell) -> str:
    if cell.type == Cell.DOUBLE:
        return cell.to_str()
    text = '"' + cell.value.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n') + '"'
    # Maybe-numeric strings are marked so the dump shows which values may become numbers.
    return text + '?' if cell.type == Cell.MBSTRN else text

def format_item(it, width=None, indent=0):
    if isinstance(it, AwkArray):
        keys = sorted(it.keys(), key=lambda k: (isinstance(k, str), k))
        items = [f"{_format_key(k)}: {format_item(it[k])}" for k in keys]
        single_line = '{' + ', '.join(items) + '}'
        if width is None or len(single_line) + indent <= width: return single_line
        pad = ' ' * (indent + 4)
        return '{\n' + ''.join(f"{pad}{item},\n" for item in items) + ' ' * indent + '}'
    if isinstance(it, Cell):
        return format_cell(it)
    return str(it)

def show_namespace(runtime, names=None, width=72, file=None) -> None:
    """Print the seeded global namespace and the program sources, as `-W dump` does."""
    symbols = runtime.symbols
    for name in names or sorted(symbols):
        if name not in symbols: continue
        print(f"{name:<10} {format_item(symbols[name], width=width, indent=11)}", file=file)
    if runtime.program_text is not None:
        print(f"{'program':<10} {format_cell(Cell.string(runtime.program_text))}", file=file)
    for filename in runtime.program_files:
        print(f"{'file':<10} {filename}", file=file)
