from kmp_scaffold.module_builder import main

main()
