from .exceptions import FormBuilderException
from .executor import Executor
from .form import FormModel
from .renderer import FormRenderer


def repl_loop(base_dir: str = "data"):
    exe = Executor(base_dir=base_dir)
    renderer = FormRenderer()
    print("formbuilder console. Enter CREATE TABLE / DESCRIBE / DROP TABLE statements terminated with ';'.")
    print("Commands: .exit, .tables, .describe <table>, .form <table>")
    buffer = []
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not line:
            continue
        stripped = line.strip()
        if stripped == ".exit":
            break
        if stripped == ".tables":
            print("Tables:", exe.list_tables())
            continue
        if stripped.startswith((".describe", ".form")):
            parts = stripped.split(None, 1)
            if len(parts) != 2:
                print(f"Usage: {parts[0]} <table>")
                continue
            tbl = parts[1].strip()
            try:
                if parts[0] == ".describe":
                    for column in exe.describe_table(tbl):
                        print(column)
                else:
                    print(renderer.render(FormModel.from_backend(exe, tbl)))
            except FormBuilderException as e:
                print("Error:", e)
            continue
        buffer.append(line)
        if stripped.endswith(";"):
            sql = "\n".join(buffer)
            buffer = []
            try:
                res = exe.execute(sql)
                print(res)
            except (FormBuilderException, ValueError) as e:
                print(f"Error: {e}")


if __name__ == "__main__":
    repl_loop()
