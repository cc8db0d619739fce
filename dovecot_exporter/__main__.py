from dovecot_exporter.main import main

main()
