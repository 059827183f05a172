# Name of the file generated by `generate-package-list` inside the target support files dir.
MODULES_PROVIDER_FILE_NAME = "ExpoModulesProvider.swift"

AUTOLINKING_PACKAGE = "expo-modules-autolinking"

# Platforms (by display name) that can host Expo modules.
SUPPORTED_PLATFORMS = ("iOS", "macOS", "tvOS")

DEBUG_CONFIGURATION = "Debug"

INTERFACE_POD_SUFFIX = "Interface"

OPTIONS_FILE_ENV = "AUTOLINKING_OPTIONS_FILE"
