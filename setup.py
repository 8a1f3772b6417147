from setuptools import setup

package_name = 'depth_follower'

setup(
    name=package_name,
    version='0.1.0',
    packages=[package_name],
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        ('share/' + package_name + '/launch', ['launch/depth_follower_launch.py']),
        ('share/' + package_name + '/config', ['config/follower_params.yaml']),
    ],
    install_requires=['setuptools', 'numpy'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='sancross354',
    maintainer_email='your_email@example.com',
    description='Depth camera target follower with obstacle avoidance (ROS2)',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'depth_follower_node = depth_follower.follower_node:main',
        ],
    },
)
