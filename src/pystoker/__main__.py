from pystoker.cli import main

main()
