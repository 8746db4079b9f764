from rich.pretty import pprint

from clinch import *

cmdline = CmdLine(shell=True, fancy=True)
cmdline.add(Flag("-q", "--quiet"))

build = cmdline.command("build", "b")
build.add(Flag("-v", "--verbose"))
build.add(Option("-o", "--out", default="dist"))
build.add(Option("-j", "--jobs", type=int, default=1))

release = build.command("release")
release.add(Flag("--sign"))

test = cmdline.command("test", "t")
test.add(Positional("suite", value=True, default="all"))


if __name__ == '__main__':
    pprint(cmdline.parse())
    pprint(cmdline.arguments)
