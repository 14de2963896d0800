from buildseq.cli import main

main()
