"""{{project_name}}: {{description}}"""


def main():
    print("Hello from {{project_name}} by <<author>>")


if __name__ == "__main__":
    main()
